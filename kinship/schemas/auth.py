"""Request/response schemas for user and session endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login. Presence is checked by the flow, not here, so a missing field is a 400."""

    username: str | None = Field(default=None, description="User name")
    password: str | None = Field(default=None, description="Password")


class RegisterRequest(BaseModel):
    """New account details."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, alias="Name")
    password: str | None = Field(default=None, alias="Password")
    email: str | None = Field(default=None, alias="Email")


class UpdateAccountRequest(BaseModel):
    """Account update; Password is always re-hashed, Email and Role fall back to stored values."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, alias="Name")
    password: str | None = Field(default=None, alias="Password")
    email: str | None = Field(default=None, alias="Email")
    role: str | None = Field(default=None, alias="Role")


class TokenResponse(BaseModel):
    """Signed access token returned after successful login."""

    token: str = Field(..., description="Signed access token")


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    status: int
    message: str


class TokenClaims(BaseModel):
    """Verified contents of an access token."""

    user_id: int
    name: str
    role: str
    session_id: str
    password_fingerprint: str
    issued_at: datetime
    expires_at: datetime


class CurrentUser(BaseModel):
    """Authenticated identity injected into protected handlers."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    role: str
    session_id: str


class UserListItem(BaseModel):
    """User entry for admin list (no password hash, no session id)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int = Field(..., alias="Id")
    name: str = Field(..., alias="Name")
    email: str | None = Field(default=None, alias="Email")
    role: str = Field(..., alias="Role")


class UsersListResponse(BaseModel):
    """Response for GET /user/list (admin only)."""

    users: list[UserListItem]
