"""Core app configuration, database, security and logging."""

from pulsevote.core.config import Settings, get_settings
from pulsevote.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]
