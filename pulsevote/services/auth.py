"""Registration and the login gate with failed-attempt lockout."""

import enum
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pulsevote.core.config import Settings
from pulsevote.core.errors import InternalError, ValidationError
from pulsevote.core.logging import (
    log_account_locked,
    log_login_attempt,
    log_user_registered,
)
from pulsevote.core.security import TokenService, hash_password, verify_password
from pulsevote.models.user import Role, User, is_locked
from pulsevote.repositories.users import UserRepository
from pulsevote.schemas.auth import RegisterRequest


class LoginOutcome(str, enum.Enum):
    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_LOCKED = "account_locked"
    ACCOUNT_INACTIVE = "account_inactive"


@dataclass(frozen=True)
class LoginResult:
    outcome: LoginOutcome
    user: User | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is LoginOutcome.SUCCESS


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AuthService:
    """
    Account creation and credential checks.

    Lockout states: unlocked (lock_until empty or past) and locked
    (lock_until in the future). A failed check increments login_attempts and
    locks the account for LOCKOUT_DURATION_MINUTES once the counter reaches
    LOCKOUT_MAX_ATTEMPTS; a failure after an expired lock restarts the counter
    at 1; a success clears both.
    """

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        settings: Settings,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.users = users
        self.tokens = tokens
        self.settings = settings
        self.clock = clock

    def register(self, body: RegisterRequest) -> tuple[User, str]:
        """Create a user with role 'user' and return it with a fresh token."""
        existing = self.users.find_conflict(body.username, body.email)
        if existing is not None:
            if existing.username == body.username:
                raise ValidationError("Username already exists")
            raise ValidationError("Email already exists")

        user = User(
            username=body.username,
            email=body.email,
            password_hash=hash_password(body.password, rounds=self.settings.BCRYPT_ROUNDS),
            role=Role.USER.value,
            is_active=True,
            login_attempts=0,
            last_login=self.clock(),
        )
        try:
            user = self.users.add(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same handle or email.
            self.users.session.rollback()
            raise ValidationError("Username or email already exists", cause=e) from e
        except SQLAlchemyError as e:
            self.users.session.rollback()
            raise InternalError("Could not create user", cause=e) from e

        log_user_registered(user.id, user.username)
        return user, self.tokens.issue(user.id)

    def check_login(self, username: str, password: str, ip: str | None = None) -> LoginResult:
        """
        Gate a login attempt and record its result.

        Unknown handle and wrong password give the same INVALID_CREDENTIALS.
        Inactive wins over locked; a locked account is refused before any
        password comparison.
        """
        user = self.users.get_by_username(username)
        if user is None:
            log_login_attempt(username, False, LoginOutcome.INVALID_CREDENTIALS.value, ip)
            return LoginResult(LoginOutcome.INVALID_CREDENTIALS)

        if not user.is_active:
            log_login_attempt(username, False, LoginOutcome.ACCOUNT_INACTIVE.value, ip)
            return LoginResult(LoginOutcome.ACCOUNT_INACTIVE)

        now = self.clock()
        if is_locked(user.lock_until, now):
            log_login_attempt(username, False, LoginOutcome.ACCOUNT_LOCKED.value, ip)
            return LoginResult(LoginOutcome.ACCOUNT_LOCKED)

        if verify_password(password, user.password_hash):
            user = self.users.record_successful_login(user.id, now)
            if user is None:
                # Row deleted between the lookup and the update.
                log_login_attempt(username, False, LoginOutcome.INVALID_CREDENTIALS.value, ip)
                return LoginResult(LoginOutcome.INVALID_CREDENTIALS)
            log_login_attempt(username, True, LoginOutcome.SUCCESS.value, ip)
            return LoginResult(LoginOutcome.SUCCESS, user)

        updated = self.users.record_failed_attempt(
            user.id,
            now,
            max_attempts=self.settings.LOCKOUT_MAX_ATTEMPTS,
            lock_duration=timedelta(minutes=self.settings.LOCKOUT_DURATION_MINUTES),
        )
        log_login_attempt(username, False, LoginOutcome.INVALID_CREDENTIALS.value, ip)
        if updated is not None and is_locked(updated.lock_until, now):
            log_account_locked(username, ip)
        return LoginResult(LoginOutcome.INVALID_CREDENTIALS)

    def issue_token(self, user: User) -> str:
        return self.tokens.issue(user.id)
