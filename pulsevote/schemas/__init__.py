"""Pydantic request/response schemas."""

from pulsevote.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    UserSummary,
    UsersListResponse,
)
from pulsevote.schemas.health import HealthResponse
from pulsevote.schemas.polls import (
    PollCreateRequest,
    PollCreator,
    PollOptionOut,
    PollOut,
    VoteRequest,
)

__all__ = [
    "AuthResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "PollCreateRequest",
    "PollCreator",
    "PollOptionOut",
    "PollOut",
    "ProfileResponse",
    "RegisterRequest",
    "UserSummary",
    "UsersListResponse",
    "VoteRequest",
]
