"""Custom exception classes for the Purchase Request API.

Business-rule failures carry an HTTP status code and a client-safe message.
The exception handlers registered in ``app.py`` translate them 1:1 into
JSON error responses.
"""

from typing import Optional


class PurchaseApiError(Exception):
    """Base exception for all Purchase Request API errors.

    Errors without a ``status_code`` are treated as internal failures.
    """

    status_code: Optional[int] = None

    def __init__(self, message: str = ""):
        """Initialize the exception.

        Args:
            message: Human readable message returned to the client.
        """
        self.message = message
        super().__init__(message)


class ValidationError(PurchaseApiError):
    """Raised when a required field is missing from a request."""

    status_code = 400


class UnauthenticatedError(PurchaseApiError):
    """Raised for missing tokens or invalid credentials."""

    status_code = 401


class ForbiddenError(PurchaseApiError):
    """Raised when the caller is authenticated but not allowed to act."""

    status_code = 403


class NotFoundError(PurchaseApiError):
    """Raised when an entity is absent or not owned by the caller."""

    status_code = 404


class ConflictError(PurchaseApiError):
    """Raised when a unique field is already taken."""

    status_code = 409


class ConfigurationError(PurchaseApiError):
    """Raised when there is a configuration error."""

    pass


class InvalidTokenError(PurchaseApiError):
    """Raised when a bearer token fails signature, issuer or expiry checks."""

    status_code = 403
