"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from pulsevote.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class RegisterRequest(BaseModel):
    """New account: handle, password and email."""

    username: str = Field(..., description="Unique handle (3-30 characters)")
    password: str = Field(..., description="Password (at least 6 characters)")
    email: EmailStr = Field(..., description="Unique email address")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not (USERNAME_MIN_LEN <= len(v) <= USERNAME_MAX_LEN):
            raise ValueError(
                f"Username must be between {USERNAME_MIN_LEN} and {USERNAME_MAX_LEN} characters"
            )
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < PASSWORD_MIN_LEN:
            raise ValueError(f"Password must be at least {PASSWORD_MIN_LEN} characters")
        if len(v) > PASSWORD_MAX_LEN:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_LEN} characters")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        # Stored usernames are trimmed at registration.
        return v.strip()


class UserSummary(BaseModel):
    """Public view of a user (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str


class AuthResponse(UserSummary):
    """User summary plus the bearer token, returned by register and login."""

    token: str = Field(..., description="JWT bearer token")


class ProfileResponse(UserSummary):
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime | None = None


class UsersListResponse(BaseModel):
    """Response for GET /auth/users (admin only)."""

    users: list[UserSummary]


class MessageResponse(BaseModel):
    message: str
