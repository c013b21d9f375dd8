"""Application error taxonomy.

Services and repositories raise these; they know nothing about HTTP.
The mapping to status codes lives in ``ERROR_STATUS_CODES`` and is applied
by the exception handler registered in ``main.py``.
"""

from datetime import UTC, datetime


class AppError(Exception):
    """Base class for every error kind the API reports to clients."""

    default_message = "An error occurred."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        self.timestamp = datetime.now(UTC)
        super().__init__(self.message)


class BadRequestError(AppError):
    default_message = "Invalid parameters provided."


class AuthenticationError(AppError):
    default_message = "Authentication failed."


class AuthorizationError(AppError):
    default_message = "Insufficient privileges to access this resource."


class NotFoundError(AppError):
    default_message = "No resource found using the provided parameters."


class ResourcePersistenceError(AppError):
    default_message = "The resource could not be persisted."


class InternalServerError(AppError):
    default_message = "An unexpected error occurred."


ERROR_STATUS_CODES: dict[type[AppError], int] = {
    BadRequestError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    ResourcePersistenceError: 409,
    InternalServerError: 500,
}


def status_code_for(error: AppError) -> int:
    """Resolve the HTTP status for an error, walking its class hierarchy."""
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500

