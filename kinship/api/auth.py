"""Token auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.exc import SQLAlchemyError

from kinship.core.config import Settings
from kinship.core.dependencies import get_app_settings, get_token_service
from kinship.core.security import TokenError, TokenService
from kinship.models import Role
from kinship.schemas.auth import CurrentUser
from kinship.services.errors import AuthenticationError, InternalError, PermissionDeniedError
from kinship.services.users import UserRepository

logger = logging.getLogger(__name__)

# Clients send either the bare token or "Bearer <token>" in Authorization.
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def extract_token(header_value: str | None) -> str | None:
    """Return the token from an Authorization header value, or None when absent."""
    if not header_value or not header_value.strip():
        return None
    value = header_value.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        return rest.strip() or None
    return value


def _not_authenticated(message: str = "Not authenticated") -> AuthenticationError:
    return AuthenticationError(message, status_code=401)


def _check_live_session(request: Request, user_id: int, session_id: str) -> None:
    db = request.app.state.database.SessionLocal()
    try:
        user = UserRepository(db).get_by_id(user_id)
        stored_session_id = user.session_id if user is not None else None
    except SQLAlchemyError as e:
        logger.exception("User lookup failed")
        raise InternalError("Failed to load user") from e
    finally:
        db.close()
    if stored_session_id is None or stored_session_id != session_id:
        raise _not_authenticated("Session is no longer active")


def get_current_user(
    request: Request,
    authorization: Annotated[str | None, Depends(authorization_header)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CurrentUser:
    """
    Dependency: require a valid token and return the caller's identity.

    Raises 401 if the token is missing, malformed, wrongly signed or expired.
    The stored session id is only compared when AUTH_VERIFY_SESSION is on;
    otherwise no database session is opened.
    """
    token = extract_token(authorization)
    if token is None:
        raise _not_authenticated()
    try:
        claims = tokens.decode(token)
    except TokenError as e:
        logger.debug("Token rejected: %s", e.reason)
        raise _not_authenticated() from e

    if settings.AUTH_VERIFY_SESSION:
        _check_live_session(request, claims.user_id, claims.session_id)

    current_user = CurrentUser(
        id=claims.user_id,
        name=claims.name,
        role=claims.role,
        session_id=claims.session_id,
    )
    request.state.current_user = current_user
    return current_user


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require an authenticated user with role 'Admin'. Raises 403 otherwise."""
    if current_user.role != Role.ADMIN.value:
        raise PermissionDeniedError("Admin access required")
    return current_user
