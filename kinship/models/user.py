"""ORM model for application users (auth, sessions and roles)."""

import enum

from sqlalchemy import Column, DateTime, Integer, String

from kinship.models.base import Base


class Role(str, enum.Enum):
    """Fixed role set; VIEWER is the least privileged and the registration default."""

    VIEWER = "Viewer"
    ADMIN = "Admin"


class User(Base):
    """
    User account for token authentication and role-based access control.

    session_id holds the identifier of the one live session; NULL means logged out.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(320), nullable=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    role = Column(String(32), nullable=False, default=Role.VIEWER.value)
    session_id = Column(String(64), nullable=True)
