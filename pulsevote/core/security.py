"""Password hashing and JWT issuing/verification for authentication."""

import enum
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from pulsevote.core.config import Settings

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 30
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

DEFAULT_BCRYPT_ROUNDS = 12


def hash_password(plain_password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    if not hashed:
        return False
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenStatus(str, enum.Enum):
    VALID = "valid"
    EXPIRED = "expired"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class TokenVerification:
    """Outcome of TokenService.verify; user_id is set only when status is VALID."""

    status: TokenStatus
    user_id: int | None = None

    @property
    def is_valid(self) -> bool:
        return self.status is TokenStatus.VALID


class TokenService:
    """Issues and verifies signed, time-bound bearer tokens (JWT)."""

    def __init__(self, settings: Settings) -> None:
        self._secret = settings.JWT_SECRET.get_secret_value()
        self._algorithm = settings.JWT_ALGORITHM
        self._lifetime = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)

    def issue(self, user_id: int, now: datetime | None = None) -> str:
        """Create a JWT with sub (user id), iat and exp."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenVerification:
        """
        Check signature and expiry, then read the subject.
        Claims are only trusted after jwt.decode has validated the signature.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            return TokenVerification(TokenStatus.EXPIRED)
        except jwt.PyJWTError:
            return TokenVerification(TokenStatus.MALFORMED)

        try:
            user_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            return TokenVerification(TokenStatus.MALFORMED)
        return TokenVerification(TokenStatus.VALID, user_id=user_id)
