"""Password hashing and JWT creation/verification for authentication."""

import hashlib
import hmac
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from functools import cached_property
from typing import Any

import bcrypt
import jwt

from kinship.core.config import Settings
from kinship.schemas.auth import TokenClaims

# bcrypt only looks at the first 72 bytes of input.
BCRYPT_MAX_BYTES = 72

# Min/max lengths for name and password validation.
USERNAME_MAX_LEN = 255
PASSWORD_MAX_LEN = 128

# Claims every issued token carries; decode rejects tokens missing any of them.
REQUIRED_CLAIMS = ["sub", "name", "role", "sid", "pwf", "iat", "exp"]


class PasswordHasher:
    """Hash and verify user passwords with bcrypt."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Each call draws a new salt."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed: str | None) -> bool:
        """Verify a plain password against a stored hash; a malformed hash never matches."""
        if not hashed:
            return False
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    @cached_property
    def _dummy_hash(self) -> str:
        return self.hash("kinship-timing-dummy")

    def verify_dummy(self, plain_password: str) -> None:
        """Spend one verification on a throwaway hash so an unknown user costs as much as a known one."""
        self.verify(plain_password, self._dummy_hash)


class TokenError(Exception):
    """Raised when a token cannot be accepted. `reason` names the failure kind."""

    reason = "invalid"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TokenMalformedError(TokenError):
    reason = "malformed"


class TokenSignatureError(TokenError):
    reason = "signature"


class TokenExpiredError(TokenError):
    reason = "expired"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Issue and validate signed, expiring access tokens (HS256 JWT).

    Claims: sub (user id), name, role, sid (session id), pwf (password
    fingerprint), iat, exp. The fingerprint is an HMAC of the stored password
    hash under the signing secret, so the token body never exposes the hash
    itself but still changes whenever the password does.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret or not secret.strip():
            raise ValueError("Token signing secret must be set and non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.default_ttl = timedelta(minutes=expire_minutes)
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def password_fingerprint(self, password_hash: str) -> str:
        return hmac.new(
            self._secret.encode("utf-8"),
            password_hash.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    def matches_password(self, claims: TokenClaims, password_hash: str) -> bool:
        """True when the token was issued while `password_hash` was the stored hash."""
        return hmac.compare_digest(claims.password_fingerprint, self.password_fingerprint(password_hash))

    def issue(
        self,
        user_id: int,
        name: str,
        role: str,
        session_id: str,
        password_hash: str,
        ttl: timedelta | None = None,
    ) -> str:
        """Create a signed token for the given identity and session."""
        now = self._clock()
        expire = now + (ttl if ttl is not None else self.default_ttl)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "name": name,
            "role": role,
            "sid": session_id,
            "pwf": self.password_fingerprint(password_hash),
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry and return the claims.

        Raises TokenExpiredError, TokenSignatureError or TokenMalformedError.
        Expiry is checked against the injected clock with no leeway, the same
        clock issue() stamps iat and exp with.
        """
        if not token:
            raise TokenMalformedError("Token is empty")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidSignatureError as e:
            raise TokenSignatureError("Token signature is invalid") from e
        except jwt.PyJWTError as e:
            raise TokenMalformedError("Token is malformed") from e

        try:
            claims = TokenClaims(
                user_id=int(payload["sub"]),
                name=payload["name"],
                role=payload["role"],
                session_id=payload["sid"],
                password_fingerprint=payload["pwf"],
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise TokenMalformedError("Token payload is invalid") from e
        if claims.expires_at <= self._clock():
            raise TokenExpiredError("Token has expired")
        return claims
