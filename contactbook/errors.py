"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; ``contactbook.api.errors``
turns them into the JSON error envelope.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that should reach the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MalformedRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Malformed request"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden resource"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"
