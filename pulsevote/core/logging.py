"""Logging setup plus security and application event helpers."""

import logging

from pulsevote.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"

security_logger = logging.getLogger("pulsevote.security")
app_logger = logging.getLogger("pulsevote.app")


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


def log_login_attempt(username: str, success: bool, outcome: str, ip: str | None = None) -> None:
    security_logger.info(
        "Login attempt: username=%s success=%s outcome=%s ip=%s",
        username,
        success,
        outcome,
        ip or "-",
    )


def log_account_locked(username: str, ip: str | None = None) -> None:
    security_logger.warning("Account locked: username=%s ip=%s", username, ip or "-")


def log_unauthorized_access(path: str, reason: str, ip: str | None = None) -> None:
    security_logger.warning(
        "Unauthorized access attempt: path=%s reason=%s ip=%s",
        path,
        reason,
        ip or "-",
    )


def log_user_registered(user_id: int, username: str) -> None:
    app_logger.info("User registered: user_id=%s username=%s", user_id, username)


def log_poll_created(poll_id: int, user_id: int) -> None:
    app_logger.info("Poll created: poll_id=%s user_id=%s", poll_id, user_id)


def log_poll_voted(poll_id: int, option_index: int) -> None:
    app_logger.info("Poll voted: poll_id=%s option_index=%s", poll_id, option_index)
