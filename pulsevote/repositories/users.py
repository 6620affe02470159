"""Credential store: user lookups and atomic lockout bookkeeping."""

from datetime import datetime, timedelta

from sqlalchemy import case, literal, null, or_, update
from sqlalchemy.orm import Session

from pulsevote.models.user import User


class UserRepository:
    """Persistence for User rows. Commits are done here so each call is one unit."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def get_by_username(self, username: str) -> User | None:
        return self.session.query(User).filter(User.username == username).first()

    def find_conflict(self, username: str, email: str) -> User | None:
        """Return any user already holding this username or email."""
        return (
            self.session.query(User)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )

    def list_all(self) -> list[User]:
        return self.session.query(User).order_by(User.id).all()

    def add(self, user: User) -> User:
        if not user.password_hash:
            raise ValueError("password_hash must be set before a user is persisted")
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def record_failed_attempt(
        self,
        user_id: int,
        now: datetime,
        max_attempts: int,
        lock_duration: timedelta,
    ) -> User | None:
        """
        Count one failed login in a single UPDATE statement.

        An expired lock restarts the counter at 1; otherwise the counter grows by
        one and the lock is set once it reaches max_attempts. All SET expressions
        read the row's pre-update values, so concurrent failures are serialized
        by the database and never lose an increment.
        """
        lock_expired = (User.lock_until.is_not(None)) & (User.lock_until <= now)
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(
                login_attempts=case(
                    (lock_expired, 1),
                    else_=User.login_attempts + 1,
                ),
                lock_until=case(
                    (lock_expired, null()),
                    (
                        (User.lock_until.is_(None))
                        & (User.login_attempts + 1 >= max_attempts),
                        literal(now + lock_duration, type_=User.lock_until.type),
                    ),
                    else_=User.lock_until,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        self.session.execute(stmt)
        self.session.commit()
        return self.get_by_id(user_id)

    def record_successful_login(self, user_id: int, now: datetime) -> User | None:
        """Reset counter and lock and stamp last_login, in one UPDATE."""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(login_attempts=0, lock_until=None, last_login=now)
            .execution_options(synchronize_session=False)
        )
        self.session.execute(stmt)
        self.session.commit()
        return self.get_by_id(user_id)
