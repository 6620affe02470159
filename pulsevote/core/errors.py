"""Error taxonomy shared by services and the HTTP layer.

Each error carries the HTTP status the API answers with. Services raise these;
pulsevote.main turns them into JSON responses.
"""


class PulseVoteError(Exception):
    """Base class for expected application errors."""

    status_code: int = 500

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class ValidationError(PulseVoteError):
    """Malformed, missing or conflicting input."""

    status_code = 400


class AuthenticationError(PulseVoteError):
    """Bad credentials, or a missing, expired or invalid token."""

    status_code = 401


class AuthorizationError(PulseVoteError):
    """Authenticated, but the role is not permitted."""

    status_code = 403


class NotFoundError(PulseVoteError):
    status_code = 404


class LockedError(PulseVoteError):
    """Account is temporarily locked after too many failed logins."""

    status_code = 423


class InternalError(PulseVoteError):
    """Unexpected store or crypto failure. The message sent to clients is generic."""

    status_code = 500
