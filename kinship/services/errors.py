"""Errors raised by service flows. Each carries the HTTP status it is reported with."""


class ServiceError(Exception):
    """Base class; `message` is safe to show to clients."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(ServiceError):
    """Missing or invalid client input."""

    status_code = 400


class AuthenticationError(ServiceError):
    """Bad credentials or a missing, invalid or expired token."""

    status_code = 401


class ConflictError(ServiceError):
    """Duplicate registration."""

    status_code = 400


class PermissionDeniedError(ServiceError):
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404


class InternalError(ServiceError):
    """Persistence or token decoding failure."""

    status_code = 500
