"""Logout: end the session recorded on the user named in a token."""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError

from kinship.core.security import TokenError, TokenService
from kinship.models import User
from kinship.services.errors import AuthenticationError, InternalError, NotFoundError
from kinship.services.users import UserRepository

logger = logging.getLogger(__name__)


class SessionInvalidator:
    """
    Clears the stored session id so the presented token can no longer be matched
    against a live session, even though it has not expired yet.

    Each step is a precondition for the next:
      1. a token is present                    -> 401 otherwise
      2. the token decodes                     -> 500 otherwise
      3. the named user exists                 -> 404 otherwise
      4. the password has not changed since    -> 401 otherwise
         the token was issued
      5. session_id is cleared and committed   -> 500 if the commit fails
    """

    def __init__(self, users: UserRepository, tokens: TokenService) -> None:
        self.users = users
        self.tokens = tokens

    def logout(self, token: str | None) -> User:
        if not token or not token.strip():
            raise AuthenticationError("No token provided.")

        try:
            claims = self.tokens.decode(token.strip())
        except TokenError as e:
            logger.info("Logout rejected: reason=%s", e.reason)
            raise InternalError("Failed to authenticate token.") from e

        try:
            user = self.users.get_by_name(claims.name)
        except SQLAlchemyError as e:
            logger.exception("User lookup failed")
            raise InternalError("Failed to load user") from e
        if user is None:
            raise NotFoundError("No user found.")

        if not self.tokens.matches_password(claims, user.password_hash):
            logger.info("Logout rejected: user_id=%s reason=password_changed", user.id)
            raise AuthenticationError("Invalid password.")

        user.session_id = None
        user.updated_at = datetime.now(UTC)
        try:
            self.users.save(user)
        except SQLAlchemyError as e:
            logger.exception("Failed to clear session: user_id=%s", user.id)
            raise InternalError("Failed to end session") from e

        logger.info("Logout succeeded: user_id=%s", user.id)
        return user
