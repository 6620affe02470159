"""Register/login/profile/logout routes and auth dependencies (get_current_user, require_roles)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from pulsevote.core.config import Settings
from pulsevote.core.database import get_db
from pulsevote.core.errors import (
    AuthenticationError,
    AuthorizationError,
    LockedError,
)
from pulsevote.core.logging import log_unauthorized_access
from pulsevote.core.security import TokenService
from pulsevote.models.user import Role, User
from pulsevote.repositories.users import UserRepository
from pulsevote.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    UserSummary,
    UsersListResponse,
)
from pulsevote.services.access import AccessGuard, AuthFailure
from pulsevote.services.auth import AuthService, LoginOutcome

router = APIRouter()
security = HTTPBearer(auto_error=False)

_FAILURE_MESSAGES: dict[AuthFailure, str] = {
    AuthFailure.NO_TOKEN: "Not authorized, no token",
    AuthFailure.TOKEN_EXPIRED: "Token expired",
    AuthFailure.TOKEN_INVALID: "Token invalid",
    AuthFailure.USER_NOT_FOUND: "User not found",
    AuthFailure.ACCOUNT_INACTIVE: "Account is deactivated",
    AuthFailure.ACCOUNT_LOCKED: "Account is temporarily locked",
}


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_auth_service(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AuthService:
    return AuthService(users, tokens, settings)


def get_access_guard(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AccessGuard:
    return AccessGuard(users, tokens)


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
) -> User:
    """Dependency: require a valid Bearer JWT for a live account. 401, or 423 when locked."""
    token = credentials.credentials if credentials is not None else None
    result = guard.authenticate(token)
    if result.authenticated:
        return result.user

    log_unauthorized_access(request.url.path, result.failure.value, _client_ip(request))
    message = _FAILURE_MESSAGES[result.failure]
    if result.failure is AuthFailure.ACCOUNT_LOCKED:
        raise LockedError(message)
    raise AuthenticationError(message)


def require_roles(*roles: Role | str) -> Callable[..., User]:
    """Build a dependency that admits only users whose role is in roles."""
    allowed = frozenset(r.value if isinstance(r, Role) else r for r in roles)

    def _dependency(
        request: Request,
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if not AccessGuard.authorize(current_user, allowed):
            log_unauthorized_access(request.url.path, "insufficient_role", _client_ip(request))
            raise AuthorizationError("Access denied. Insufficient permissions.")
        return current_user

    return _dependency


require_admin = require_roles(Role.ADMIN)
require_moderator = require_roles(Role.MODERATOR, Role.ADMIN)
require_user = require_roles(Role.USER, Role.MODERATOR, Role.ADMIN)


def _auth_response(user: User, token: str) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
        token=token,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Create an account and return the user summary with a bearer token."""
    user, token = auth.register(body)
    return _auth_response(user, token)


@router.post("/login", response_model=AuthResponse)
def login(
    request: Request,
    body: LoginRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Authenticate with username and password; returns a JWT bearer token.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = auth.check_login(body.username, body.password, ip=_client_ip(request))
    if result.outcome is LoginOutcome.SUCCESS:
        return _auth_response(result.user, auth.issue_token(result.user))
    if result.outcome is LoginOutcome.ACCOUNT_LOCKED:
        raise LockedError("Account is temporarily locked due to too many failed attempts")
    if result.outcome is LoginOutcome.ACCOUNT_INACTIVE:
        raise AuthenticationError("Account is deactivated")
    raise AuthenticationError("Invalid credentials")


@router.get("/profile", response_model=ProfileResponse)
def profile(
    current_user: Annotated[User, Depends(get_current_user)],
) -> ProfileResponse:
    return ProfileResponse.model_validate(current_user)


@router.post("/logout", response_model=MessageResponse)
def logout(
    _current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    """Stateless: the token stays valid until it expires; clients discard it."""
    return MessageResponse(message="Logged out successfully")


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[User, Depends(require_admin)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(
        users=[UserSummary.model_validate(u) for u in users.list_all()]
    )
