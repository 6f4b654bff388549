"""SQLAlchemy ORM models."""

from kinship.models.base import Base
from kinship.models.family import Family
from kinship.models.user import Role, User

__all__ = ["Base", "Family", "Role", "User"]
