"""SQLAlchemy ORM models."""

from pulsevote.models.base import Base
from pulsevote.models.poll import Poll, PollOption
from pulsevote.models.user import Role, User

__all__ = ["Base", "Poll", "PollOption", "Role", "User"]
