"""Access guard: resolve a bearer token to a live user and check roles."""

import enum
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from pulsevote.core.security import TokenService, TokenStatus
from pulsevote.models.user import User, is_locked
from pulsevote.repositories.users import UserRepository


class AuthFailure(str, enum.Enum):
    NO_TOKEN = "no_token"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"
    USER_NOT_FOUND = "user_not_found"
    ACCOUNT_INACTIVE = "account_inactive"
    ACCOUNT_LOCKED = "account_locked"


@dataclass(frozen=True)
class AuthenticationResult:
    user: User | None = None
    failure: AuthFailure | None = None

    @property
    def authenticated(self) -> bool:
        return self.user is not None


class AccessGuard:
    """Read-only: never mutates lockout state."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self.users = users
        self.tokens = tokens
        self.clock = clock

    def authenticate(self, token: str | None) -> AuthenticationResult:
        """Token presence, then signature/expiry, user lookup, active flag, lock."""
        if not token:
            return AuthenticationResult(failure=AuthFailure.NO_TOKEN)

        verification = self.tokens.verify(token)
        if verification.status is TokenStatus.EXPIRED:
            return AuthenticationResult(failure=AuthFailure.TOKEN_EXPIRED)
        if not verification.is_valid:
            return AuthenticationResult(failure=AuthFailure.TOKEN_INVALID)

        user = self.users.get_by_id(verification.user_id)
        if user is None:
            return AuthenticationResult(failure=AuthFailure.USER_NOT_FOUND)
        if not user.is_active:
            return AuthenticationResult(failure=AuthFailure.ACCOUNT_INACTIVE)
        if is_locked(user.lock_until, self.clock()):
            return AuthenticationResult(failure=AuthFailure.ACCOUNT_LOCKED)
        return AuthenticationResult(user=user)

    @staticmethod
    def authorize(user: User, required_roles: Iterable[str]) -> bool:
        """Permitted iff the user's role is one of required_roles."""
        return user.has_any_role(frozenset(required_roles))
