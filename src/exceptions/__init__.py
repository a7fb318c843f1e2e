"""Custom exception classes for the FairGrade application."""

from ..models.api_responses import ErrorCode
from .application_errors import (
    ApplicationError,
    ErrorSeverity,
    NotFoundError,
    ProcessingError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "ValidationError",
    "NotFoundError",
    "ProcessingError",
    "ErrorSeverity",
    "ErrorCode",
]
