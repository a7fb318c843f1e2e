"""Standardized API response models for consistent response formatting."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class ResponseStatus(Enum):
    """Standard response status codes."""

    SUCCESS = "success"
    ERROR = "error"


class ErrorCode(Enum):
    """Standard error codes for consistent error handling."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    PROCESSING_ERROR = "PROCESSING_ERROR"


@dataclass
class APIMetadata:
    """Metadata for API responses."""

    timestamp: datetime = field(default_factory=datetime.utcnow)
    version: str = "1.0"

    def to_dict(self) -> Dict[str, Any]:
        return {"timestamp": self.timestamp.isoformat(), "version": self.version}


@dataclass
class ErrorDetail:
    """Detailed error information."""

    code: ErrorCode
    message: str
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"code": self.code.value, "message": self.message}
        if self.field:
            result["field"] = self.field
        return result


@dataclass
class APIResponse:
    """Standardized API response format."""

    status: ResponseStatus
    data: Optional[Any] = None
    message: Optional[str] = None
    errors: List[ErrorDetail] = field(default_factory=list)
    metadata: APIMetadata = field(default_factory=APIMetadata)

    def to_dict(self) -> Dict[str, Any]:
        """Convert response to dictionary for JSON serialization."""
        result = {
            "status": self.status.value,
            "data": self.data,
            "metadata": self.metadata.to_dict(),
        }

        if self.message:
            result["message"] = self.message

        if self.errors:
            result["errors"] = [error.to_dict() for error in self.errors]

        return result

    @classmethod
    def success(cls, data: Any = None, message: str = None) -> "APIResponse":
        """Create a success response."""
        return cls(status=ResponseStatus.SUCCESS, data=data, message=message)

    @classmethod
    def error(cls, message: str, errors: List[ErrorDetail] = None) -> "APIResponse":
        """Create an error response."""
        return cls(status=ResponseStatus.ERROR, message=message, errors=errors or [])
