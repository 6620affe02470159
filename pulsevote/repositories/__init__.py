"""Repositories over the SQLAlchemy session."""

from pulsevote.repositories.polls import PollRepository
from pulsevote.repositories.users import UserRepository

__all__ = ["PollRepository", "UserRepository"]
