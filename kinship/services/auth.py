"""Account flows: register, login and account update."""

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from kinship.core.security import (
    PASSWORD_MAX_LEN,
    USERNAME_MAX_LEN,
    PasswordHasher,
    TokenService,
)
from kinship.models import Role, User
from kinship.schemas.auth import CurrentUser
from kinship.services.errors import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from kinship.services.users import UserRepository

logger = logging.getLogger(__name__)

ROLE_VALUES = tuple(role.value for role in Role)


def _require_credentials(name: str | None, password: str | None) -> tuple[str, str]:
    if not name or not name.strip() or not password:
        raise ValidationError("Missing username or password")
    if len(name) > USERNAME_MAX_LEN:
        raise ValidationError("Invalid username length.")
    if len(password) > PASSWORD_MAX_LEN:
        raise ValidationError("Invalid password length.")
    return name, password


class AuthenticationFlow:
    """
    Register, log in and update accounts.

    Every public method either completes its write or raises a ServiceError;
    database failures are rolled back and reported as InternalError.
    """

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def register(self, name: str | None, password: str | None, email: str | None = None) -> User:
        """Create a Viewer account. Fails with ConflictError when the name is taken."""
        name, password = _require_credentials(name, password)
        if self._lookup(name) is not None:
            raise ConflictError("User already exists")

        now = datetime.now(UTC)
        user = User(
            name=name,
            email=email,
            password_hash=self._hash(password),
            created_at=now,
            updated_at=now,
            role=Role.VIEWER.value,
            session_id=None,
        )
        try:
            user = self.users.add(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same name.
            raise ConflictError("User already exists") from e
        except SQLAlchemyError as e:
            logger.exception("Failed to create user")
            raise InternalError("Failed to create user") from e

        logger.info("User registered: user_id=%s role=%s", user.id, user.role)
        return user

    def login(self, name: str | None, password: str | None) -> str:
        """
        Check credentials, start a new session and return its token.

        The session id is stored before the token is handed out; if the write
        fails no token is returned. Both credential failures are reported as
        400, matching the login route's contract.
        """
        if not name or not password:
            raise ValidationError("Missing username or password")

        user = self._lookup(name)
        if user is None:
            self.hasher.verify_dummy(password)
            logger.info("Login failed: reason=unknown_user")
            raise AuthenticationError("User not found", status_code=400)
        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login failed: user_id=%s reason=wrong_password", user.id)
            raise AuthenticationError("Wrong password", status_code=400)

        session_id = str(uuid.uuid4())
        token = self.tokens.issue(
            user_id=user.id,
            name=user.name,
            role=user.role,
            session_id=session_id,
            password_hash=user.password_hash,
        )
        user.session_id = session_id
        user.updated_at = datetime.now(UTC)
        try:
            self.users.save(user)
        except SQLAlchemyError as e:
            logger.exception("Failed to persist session: user_id=%s", user.id)
            raise InternalError("Failed to start session") from e

        logger.info("Login succeeded: user_id=%s", user.id)
        return token

    def update_account(
        self,
        name: str | None,
        password: str | None,
        email: str | None = None,
        role: str | None = None,
        actor: CurrentUser | None = None,
    ) -> User:
        """
        Replace the password and merge email/role over the stored account.

        The password is always re-hashed. Because the stored hash changes, the
        current session is ended as well. Non-admin actors may only update
        their own account and may not change roles.
        """
        name, password = _require_credentials(name, password)
        if role and role not in ROLE_VALUES:
            raise ValidationError(f"Role must be one of {', '.join(ROLE_VALUES)}")

        # Non-admins get 403 for any other name, whether or not it exists.
        restricted = actor is not None and actor.role != Role.ADMIN.value
        if restricted and actor.name != name:
            raise PermissionDeniedError("Admin access required to update another account")

        user = self._lookup(name)
        if user is None:
            raise NotFoundError("User not found", status_code=400)
        if restricted and role and role != user.role:
            raise PermissionDeniedError("Admin access required to change roles")

        user.password_hash = self._hash(password)
        user.email = email or user.email
        user.role = role or user.role
        user.updated_at = datetime.now(UTC)
        user.session_id = None
        try:
            self.users.save(user)
        except SQLAlchemyError as e:
            logger.exception("Failed to update user: user_id=%s", user.id)
            raise InternalError("Failed to update user") from e

        logger.info("User updated: user_id=%s role=%s", user.id, user.role)
        return user

    def _lookup(self, name: str) -> User | None:
        try:
            return self.users.get_by_name(name)
        except SQLAlchemyError as e:
            logger.exception("User lookup failed")
            raise InternalError("Failed to load user") from e

    def _hash(self, password: str) -> str:
        try:
            return self.hasher.hash(password)
        except ValueError as e:
            logger.exception("Password hashing failed")
            raise InternalError("Failed to hash password") from e
