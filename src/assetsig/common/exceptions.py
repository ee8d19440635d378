"""Custom exceptions for AssetSig.

Provides a hierarchy of exceptions with proper HTTP status codes
and structured error responses.
"""

from typing import Any


class AssetSigError(Exception):
    """Base exception for all AssetSig errors."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize exception with optional details.

        Args:
            message: Human-readable error message.
            details: Additional error details for debugging.
            cause: Original exception that caused this error.
        """
        self.message = message or self.message
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# 400 Bad Request errors
class ValidationError(AssetSigError):
    """Request validation failed."""

    status_code = 400
    error_code = "VALIDATION_ERROR"
    message = "Request validation failed"


class InvalidQueryError(ValidationError):
    """Invalid query parameters."""

    error_code = "INVALID_QUERY"
    message = "Invalid query parameters"


# 404 Not Found errors
class NotFoundError(AssetSigError):
    """Resource not found."""

    status_code = 404
    error_code = "NOT_FOUND"
    message = "Resource not found"


class AssetNotFoundError(NotFoundError):
    """Asset not found."""

    error_code = "ASSET_NOT_FOUND"
    message = "Asset not found"


# 500 Internal Server errors
class InternalError(AssetSigError):
    """Internal server error."""

    status_code = 500
    error_code = "INTERNAL_ERROR"
    message = "An internal error occurred"


class DatabaseError(InternalError):
    """Database operation failed."""

    error_code = "DATABASE_ERROR"
    message = "Database operation failed"


class ConfigurationError(InternalError):
    """Configuration error."""

    error_code = "CONFIGURATION_ERROR"
    message = "Service configuration error"


# 503 Service Unavailable errors
class ServiceUnavailableError(AssetSigError):
    """Service temporarily unavailable."""

    status_code = 503
    error_code = "SERVICE_UNAVAILABLE"
    message = "Service temporarily unavailable"
