"""Core app configuration, database and security primitives."""

from kinship.core.config import Settings, get_settings
from kinship.core.database import Database, get_db

__all__ = ["Database", "Settings", "get_db", "get_settings"]
