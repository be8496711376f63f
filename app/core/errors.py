"""
Failure kinds a request can end in. Each carries the HTTP status and the
client-facing message; the exception handlers in app.main render them as the
standard `{status: "error", message: ...}` envelope.
"""
from typing import Optional

from fastapi import status


class RelayError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class AuthorizationError(RelayError):
    """Shared secret missing or wrong."""
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


class ValidationError(RelayError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User ID (uid) is required."


class NotFoundError(RelayError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User data not found in Firestore."


class DependencyError(RelayError):
    """
    The document store read failed. The underlying cause is logged where it
    is caught and chained via `raise ... from`; only the generic message
    reaches the caller.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal Server Error"
