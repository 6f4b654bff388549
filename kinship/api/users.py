"""Account endpoints: login, register, update and logout."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from kinship.api.auth import authorization_header, extract_token, get_current_user, require_admin
from kinship.core.dependencies import (
    get_authentication_flow,
    get_session_invalidator,
    get_user_repository,
)
from kinship.schemas.auth import (
    CurrentUser,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
    UpdateAccountRequest,
    UserListItem,
    UsersListResponse,
)
from kinship.services.auth import AuthenticationFlow
from kinship.services.errors import InternalError
from kinship.services.sessions import SessionInvalidator
from kinship.services.users import UserRepository

router = APIRouter()


# GET with a JSON body is the historical contract; POST is accepted for clients that cannot send one.
@router.api_route("/login", methods=["GET", "POST"], response_model=TokenResponse)
def login(
    flow: Annotated[AuthenticationFlow, Depends(get_authentication_flow)],
    body: LoginRequest | None = None,
) -> TokenResponse:
    """
    Authenticate with username and password; returns a signed access token.
    Send the token in the Authorization header, bare or as: Bearer <token>
    """
    body = body or LoginRequest()
    token = flow.login(body.username, body.password)
    return TokenResponse(token=token)


@router.post("/register", response_model=MessageResponse)
def register(
    flow: Annotated[AuthenticationFlow, Depends(get_authentication_flow)],
    body: RegisterRequest | None = None,
) -> MessageResponse:
    """Create a new account with the Viewer role."""
    body = body or RegisterRequest()
    flow.register(body.name, body.password, body.email)
    return MessageResponse(message="User created successfully")


@router.put("/update", response_model=MessageResponse)
def update_account(
    flow: Annotated[AuthenticationFlow, Depends(get_authentication_flow)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    body: UpdateAccountRequest | None = None,
) -> MessageResponse:
    """Replace the password and optionally the email or role (role changes are admin only)."""
    body = body or UpdateAccountRequest()
    flow.update_account(
        body.name,
        body.password,
        email=body.email,
        role=body.role,
        actor=current_user,
    )
    return MessageResponse(message="User updated successfully")


@router.delete("/logout", response_model=MessageResponse)
def logout(
    invalidator: Annotated[SessionInvalidator, Depends(get_session_invalidator)],
    authorization: Annotated[str | None, Depends(authorization_header)],
) -> MessageResponse:
    """End the session the presented token belongs to."""
    invalidator.logout(extract_token(authorization))
    return MessageResponse(message="User logged out successfully")


@router.get("/list", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> UsersListResponse:
    """List all users (admin only)."""
    try:
        rows = users.list_all()
    except SQLAlchemyError as e:
        raise InternalError("Failed to load users") from e
    return UsersListResponse(users=[UserListItem.model_validate(u) for u in rows])
