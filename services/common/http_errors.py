"""
Shared error classes and utilities for the scheduling services.

Provides:
- Base exception class for API errors
- Common subclasses (Validation, Service)
- Shared error response model
- Utility to convert exceptions to error responses

The scheduling core does not speak HTTP itself, but every error it raises
carries the status code and error code that the surrounding application
layer should map it to.

Common Usage Patterns:
=====================

Basic Exception Usage:
>>> from services.common.http_errors import ServiceError, ValidationError
>>>
>>> # Validation error with field context
>>> error = ValidationError("Window end must be after start", field="end")
>>>
>>> # Calendar source failure
>>> error = ServiceError("Calendar source unavailable", code=ErrorCode.SOURCE_ERROR)

Error Response Conversion:
>>> from services.common.http_errors import exception_to_response
>>>
>>> try:
...     risky_operation()
... except Exception as e:
...     error_response = exception_to_response(e)
...     payload = error_response.model_dump()

Error Code Taxonomy:
===================
- VALIDATION_FAILED, INVALID_* : Input validation errors (422)
- EMPTY_* : Required collections supplied empty (422)
- SERVICE_* : Internal service errors (5xx)
- SOURCE_* : Calendar data source errors (502)
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel

from services.common.logging_config import request_id_var


class ErrorCode(str, Enum):
    """
    Standardized error codes for the scheduling services.

    Error codes are organized by category and follow the ALL_CAPS naming
    convention.
    """

    # ==========================================
    # GENERAL ERRORS (4xx client errors)
    # ==========================================
    VALIDATION_FAILED = "VALIDATION_FAILED"  # HTTP 422 - Input validation failed

    # ==========================================
    # SCHEDULING INPUT ERRORS (422)
    # ==========================================
    INVALID_WINDOW = "INVALID_WINDOW"  # Window start is not before its end
    INVALID_DURATION = "INVALID_DURATION"  # Meeting duration is not positive
    EMPTY_PARTICIPANT_SET = "EMPTY_PARTICIPANT_SET"  # No participants supplied

    # ==========================================
    # SERVICE ERRORS (5xx server errors)
    # ==========================================
    SERVICE_ERROR = "SERVICE_ERROR"  # Generic service error
    SOURCE_ERROR = "SOURCE_ERROR"  # Calendar data source failed


class ErrorResponse(BaseModel):
    """
    Standardized error response model.

    Attributes:
        type: Error type categorization (e.g., "validation_error")
        message: Human-readable error message for end users
        details: Optional dictionary containing additional error context
        timestamp: ISO 8601 timestamp of when the error occurred
        request_id: Unique identifier for tracing and debugging purposes

    Example:
        >>> error = ErrorResponse(
        ...     type="validation_error",
        ...     message="Window end must be after start",
        ...     details={"component": "detector", "invariant": "start < end"},
        ...     timestamp="2024-01-15T10:30:00Z",
        ...     request_id="req-abc123"
        ... )
    """

    type: str
    message: str
    details: Optional[Dict[str, Any]] = None
    timestamp: str
    request_id: str


def _current_request_id() -> str:
    request_id = request_id_var.get()
    if request_id and request_id != "uninitialized":
        return request_id
    return str(uuid.uuid4())


class SchedulerAPIException(Exception):
    """
    Base exception class for all scheduling API errors.

    Provides consistent error handling, response formatting and request
    tracking. The request id is taken from the logging context when one is
    bound, so logs and error payloads correlate.

    Attributes:
        message: Human-readable error message
        details: Dictionary containing additional error context
        error_type: Categorization of the error (validation_error, etc.)
        error_code: Specific error code from the ErrorCode enum
        status_code: HTTP status code the application layer should return
        timestamp: ISO 8601 timestamp when error occurred
        request_id: Unique identifier for request tracing
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_type: str = "internal_error",
        error_code: Optional[ErrorCode] = None,
        status_code: int = 500,
        request_id: Optional[str] = None,
    ):
        self.message = message
        self.details = details or {}
        self.error_type = error_type
        self.error_code = error_code
        self.status_code = status_code
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.request_id = request_id or _current_request_id()
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """
        Convert exception to ErrorResponse Pydantic model.

        Includes the error code in details if present.

        Example:
            >>> error = ValidationError("Invalid input", field="duration")
            >>> error.to_error_response().model_dump()
            {
                'type': 'validation_error',
                'message': 'Invalid input',
                'details': {'field': 'duration', 'code': 'VALIDATION_FAILED'},
                'timestamp': '2024-01-15T10:30:00Z',
                'request_id': 'req-abc123'
            }
        """
        details = {
            **self.details,
            **({"code": self.error_code.value} if self.error_code else {}),
        }
        return ErrorResponse(
            type=self.error_type,
            message=self.message,
            details=details if details else None,
            timestamp=self.timestamp,
            request_id=self.request_id,
        )


class ValidationError(SchedulerAPIException):
    """
    Exception for input validation errors (HTTP 422).

    Args:
        message: Human-readable description of the validation failure
        field: Optional field name that failed validation
        value: Optional invalid value that was provided
        details: Optional additional validation context
        code: Specific error code (defaults to VALIDATION_FAILED)

    Examples:
        >>> error = ValidationError("Duration is required")

        >>> error = ValidationError(
        ...     "Duration must be positive",
        ...     field="duration_minutes",
        ...     value=-15,
        ...     code=ErrorCode.INVALID_DURATION,
        ... )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.VALIDATION_FAILED,
    ):
        validation_details = details or {}
        if field:
            validation_details["field"] = field
        if value is not None:
            validation_details["value"] = str(value)
        super().__init__(
            message=message,
            details=validation_details,
            error_type="validation_error",
            error_code=code,
            status_code=422,
        )
        self.field = field
        self.value = value


class ServiceError(SchedulerAPIException):
    """
    Exception for internal service errors (HTTP 502).

    Used when a downstream collaborator fails, such as the calendar source
    that supplies busy intervals.

    Examples:
        >>> error = ServiceError(
        ...     "Calendar source unavailable",
        ...     code=ErrorCode.SOURCE_ERROR,
        ...     details={"participant_id": "user-123"}
        ... )
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.SERVICE_ERROR,
        status_code: int = 502,
    ):
        super().__init__(
            message=message,
            details=details,
            error_type="service_error",
            error_code=code,
            status_code=status_code,
        )


def exception_to_response(exc: Exception) -> ErrorResponse:
    """
    Convert any exception to a standardized ErrorResponse Pydantic model.

    1. SchedulerAPIException: Uses the built-in to_error_response() method
    2. Generic Exception: Creates a safe internal error response

    Examples:
        >>> error = ValidationError("Invalid window", field="end")
        >>> exception_to_response(error).type
        'validation_error'

        >>> exception_to_response(ValueError("boom")).details["error_type"]
        'ValueError'

    Note:
        Generic exceptions keep only their type name in details, the
        message is passed through as-is.
    """
    if isinstance(exc, SchedulerAPIException):
        return exc.to_error_response()
    return ErrorResponse(
        type="internal_error",
        message=str(exc),
        details={"error_type": type(exc).__name__},
        timestamp=datetime.now(timezone.utc).isoformat(),
        request_id=_current_request_id(),
    )
