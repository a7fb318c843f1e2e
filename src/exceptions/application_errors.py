"""Application-specific exception classes with standardized error handling."""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from src.models.api_responses import ErrorCode


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ApplicationError(Exception):
    """Base application error class.

    Carries a standardized error code, a user-facing message and optional
    details so the web layer can render a consistent response.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        original_error: Optional[Exception] = None,
        field: Optional[str] = None,
    ):
        """Initialize application error.

        Args:
            message: Technical error message for developers
            error_code: Standardized error code
            user_message: User-friendly error message
            details: Additional error details
            severity: Error severity level
            original_error: Original exception that caused this error
            field: Field name for validation errors
        """
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.user_message = user_message or self._get_default_user_message()
        self.details = details or {}
        self.severity = severity
        self.original_error = original_error
        self.field = field

        self.timestamp = datetime.utcnow()
        self.error_id = f"ERR_{uuid.uuid4().hex[:8].upper()}"

        if original_error:
            self.details["original_error"] = {
                "type": type(original_error).__name__,
                "message": str(original_error),
            }

    def _get_default_user_message(self) -> str:
        user_messages = {
            ErrorCode.VALIDATION_ERROR: "Please check your input and try again.",
            ErrorCode.NOT_FOUND: "The requested resource was not found.",
            ErrorCode.PROCESSING_ERROR: "We're having trouble processing your request. Please try again.",
            ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again later.",
        }
        return user_messages.get(
            self.error_code, "An error occurred. Please try again."
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging and API responses."""
        return {
            "error_id": self.error_id,
            "timestamp": self.timestamp.isoformat(),
            "error_code": self.error_code.value,
            "message": self.message,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "field": self.field,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.message} (ID: {self.error_id})"


class ValidationError(ApplicationError):
    """Validation error for input validation failures.

    ``title`` is the short heading shown with the notification, the message is
    the description.
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        title: str = "Invalid input",
        field: Optional[str] = None,
        **kwargs,
    ):
        self.title = title
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            user_message=message,
            field=field,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )


class NotFoundError(ApplicationError):
    """Not found error for missing resources."""

    status_code = 404

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", None) or {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            error_code=ErrorCode.NOT_FOUND,
            details=details,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )


class ProcessingError(ApplicationError):
    """Processing error for grading pipeline failures."""

    status_code = 422

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            error_code=ErrorCode.PROCESSING_ERROR,
            details=details,
            **kwargs,
        )
