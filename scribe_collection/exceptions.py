"""Custom exception hierarchy for scribe-collection."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes."""

    # Collection errors
    USER_NOT_FOUND = "USER_NOT_FOUND"
    COLLECTION_FETCH_FAILED = "COLLECTION_FETCH_FAILED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ScribeException(Exception):
    """
    Base exception for all scribe-collection errors.

    Provides structured error data with:
    - Human-readable message
    - Machine-readable error code
    - HTTP status code a caller should surface
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for JSON response.

        Returns:
            Dictionary with error, message, and details fields
        """
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class ValidationError(ScribeException):
    """Validation failed for caller input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details
        )


class UserNotFoundError(ScribeException):
    """User does not exist or has no public documents."""

    def __init__(self, username: str):
        super().__init__(
            "User not found or has no public documents",
            ErrorCode.USER_NOT_FOUND,
            status_code=404,
            details={"username": username}
        )


class CollectionFetchError(ScribeException):
    """The document-listing API failed or returned an unusable payload."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        details = {}
        if original_error:
            details["original_error"] = str(original_error)

        super().__init__(
            message,
            ErrorCode.COLLECTION_FETCH_FAILED,
            status_code=502,
            details=details
        )
