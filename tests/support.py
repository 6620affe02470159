"""Shared helpers for tests: settings, in-memory SQLite sessions, a settable clock."""

from datetime import UTC, datetime, timedelta

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pulsevote.core.config import Settings
from pulsevote.core.security import hash_password
from pulsevote.models import Base, User

TEST_SECRET = "test-secret-key-for-unit-tests-only-0123456789"


def make_settings(**overrides: object) -> Settings:
    """Settings for tests: in-memory SQLite and cheap bcrypt."""
    values: dict[str, object] = {
        "JWT_SECRET": TEST_SECRET,
        "DATABASE_URL": "sqlite://",
        "BCRYPT_ROUNDS": 4,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_session() -> tuple[Session, object]:
    """Return (session, engine) on a fresh in-memory database with all tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    return session, engine


def add_user(
    session: Session,
    username: str = "alice",
    password: str = "Secret1",
    email: str | None = None,
    role: str = "user",
    is_active: bool = True,
    login_attempts: int = 0,
    lock_until: datetime | None = None,
) -> User:
    user = User(
        username=username,
        email=email or f"{username}@x.com",
        password_hash=hash_password(password, rounds=4),
        role=role,
        is_active=is_active,
        login_attempts=login_attempts,
        lock_until=lock_until,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


class FakeClock:
    """Callable clock that tests move forward explicitly."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime.now(UTC).replace(microsecond=0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)
