"""ORM model for application users (auth, lockout and RBAC)."""

import enum
from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    String,
    func,
)

from pulsevote.models.base import Base


class Role(str, enum.Enum):
    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


ROLE_VALUES = tuple(r.value for r in Role)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps (SQLite returns them without tzinfo)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def is_locked(lock_until: datetime | None, now: datetime | None = None) -> bool:
    """True while lock_until is set and still in the future."""
    lock_until = as_utc(lock_until)
    if lock_until is None:
        return False
    return lock_until > (now or datetime.now(UTC))


class User(Base):
    """
    User account for login, lockout and role-based access control.

    role: 'user', 'moderator' or 'admin'
    is_locked is derived from lock_until and never stored.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "role IN ('user', 'moderator', 'admin')", name="ck_users_role"
        ),
        CheckConstraint("login_attempts >= 0", name="ck_users_login_attempts"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(30), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    login_attempts = Column(Integer, nullable=False, default=0)
    lock_until = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    @property
    def is_locked(self) -> bool:
        return is_locked(self.lock_until)

    def has_any_role(self, roles: set[str] | frozenset[str]) -> bool:
        """Membership test on the single role; unknown stored roles are a data fault."""
        if self.role not in ROLE_VALUES:
            raise ValueError(f"User {self.id} has unknown role {self.role!r}")
        return self.role in roles
