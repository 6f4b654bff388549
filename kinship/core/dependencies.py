"""Reusable dependencies for FastAPI routes.

Service instances are built once in create_app and kept on app.state; these
functions hand them to route handlers and assemble per-request flows.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from kinship.core.config import Settings
from kinship.core.database import get_db
from kinship.core.security import PasswordHasher, TokenService
from kinship.services.auth import AuthenticationFlow
from kinship.services.sessions import SessionInvalidator
from kinship.services.users import UserRepository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_authentication_flow(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthenticationFlow:
    return AuthenticationFlow(users, hasher, tokens)


def get_session_invalidator(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> SessionInvalidator:
    return SessionInvalidator(users, tokens)
