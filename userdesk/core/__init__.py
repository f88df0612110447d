"""Core app configuration, database and security."""

from userdesk.core.config import get_settings, settings
from userdesk.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
