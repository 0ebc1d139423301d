"""
Exceptions - Error taxonomy shared by services and HTTP handlers.

Every error carries the HTTP status and the caller-facing message.
Internal details (driver errors, stack traces) stay in the server logs.
"""
from typing import Optional

from pymongo.errors import ConnectionFailure, PyMongoError


class RideZoneError(Exception):
    """Base exception for all RideZone API errors."""

    status_code: int = 500
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RideZoneError):
    """A required field is missing or malformed."""

    status_code = 400
    default_message = "Invalid request"


class InvalidCredentialsError(RideZoneError):
    """Authentication failed. Never says which part was wrong."""

    status_code = 401
    default_message = "Invalid email or password"


class ProductNotFoundError(RideZoneError):
    """Raised when a product cannot be found."""

    status_code = 404
    default_message = "Not found"

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__()


class DuplicateUserError(RideZoneError):
    """A user with the same normalized email already exists."""

    status_code = 409
    default_message = "User already exists"


class StoreFailureError(RideZoneError):
    """Unexpected driver or network error."""

    status_code = 500
    default_message = "Server error"


class NotConnectedError(RideZoneError):
    """The document store is unavailable. Safe to retry after backoff."""

    status_code = 503
    default_message = "DB not connected"


def translate_store_error(exc: PyMongoError) -> RideZoneError:
    """Map a pymongo error to the caller-facing error kind."""
    if isinstance(exc, ConnectionFailure):
        return NotConnectedError()
    return StoreFailureError()
