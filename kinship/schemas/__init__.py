"""Pydantic request/response schemas."""

from kinship.schemas.auth import (
    CurrentUser,
    ErrorResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenClaims,
    TokenResponse,
    UpdateAccountRequest,
    UserListItem,
    UsersListResponse,
)
from kinship.schemas.family import (
    FamilyCreate,
    FamilyRead,
    FamilyUpdate,
    PageCountResponse,
)
from kinship.schemas.health import HealthResponse

__all__ = [
    "CurrentUser",
    "ErrorResponse",
    "FamilyCreate",
    "FamilyRead",
    "FamilyUpdate",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "PageCountResponse",
    "RegisterRequest",
    "TokenClaims",
    "TokenResponse",
    "UpdateAccountRequest",
    "UserListItem",
    "UsersListResponse",
]
