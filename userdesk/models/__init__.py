"""SQLAlchemy ORM models."""

from userdesk.models.base import Base
from userdesk.models.user import User, UserRole, UserStatus

__all__ = ["Base", "User", "UserRole", "UserStatus"]
