"""Data models for API responses and grading."""

from .api_responses import APIResponse, ErrorCode, ErrorDetail, ResponseStatus
from .grading_models import (
    Criterion,
    CriterionResult,
    GradingResult,
    GradingSession,
    StoredUser,
    StudentFile,
    User,
)

__all__ = [
    "APIResponse",
    "ErrorCode",
    "ErrorDetail",
    "ResponseStatus",
    "Criterion",
    "CriterionResult",
    "GradingResult",
    "GradingSession",
    "StoredUser",
    "StudentFile",
    "User",
]
