"""Error codes and operation results for planner operations.

Expected failures (a full room, a form with a missing field) are returned
as an ``OperationResult`` rather than raised, so callers can show the
message and carry on. ``PlannerError`` is reserved for programming errors
such as asking for a resource kind that does not exist.
"""

from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Standard error codes returned by planner operations."""

    NOT_FOUND = "not_found"
    RESOURCE_FULL = "resource_full"
    VALIDATION_ERROR = "validation_error"
    VERSION_CONFLICT = "version_conflict"
    CONSISTENCY_VIOLATION = "consistency_violation"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.NOT_FOUND: "The requested item was not found",
    ErrorCode.RESOURCE_FULL: "This resource has reached its capacity",
    ErrorCode.VALIDATION_ERROR: "Please fill in all required fields",
    ErrorCode.VERSION_CONFLICT: "This resource was changed by someone else",
    ErrorCode.CONSISTENCY_VIOLATION: "A reference points at a record that no longer exists",
}


class OperationResult(BaseModel, Generic[T]):
    """Outcome of an operation that can fail for an expected reason.

    On success ``value`` holds the created or updated object. On failure
    ``error_code`` and ``message`` describe what went wrong and nothing
    was changed.
    """

    success: bool
    value: Optional[T] = None
    error_code: Optional[ErrorCode] = None
    message: Optional[str] = None
    details: Optional[dict[str, Any]] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(
        cls,
        code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> "OperationResult[T]":
        """Create a failed result, defaulting the message from the code.

        Args:
            code: The error code
            message: Text to show instead of the standard message
            details: Optional additional context about the error

        Returns:
            A failed OperationResult.
        """
        return cls(
            success=False,
            error_code=code,
            message=message or ERROR_MESSAGES[code],
            details=details,
        )

    def __bool__(self) -> bool:
        return self.success


class PlannerError(Exception):
    """Raised for invalid calls that indicate a bug in the caller."""

    def __init__(self, code: ErrorCode, message: Optional[str] = None):
        self.code = code
        self.message = message or ERROR_MESSAGES[code]
        super().__init__(self.message)
