"""
Scheduling engine errors.

Every error names the component that rejected the input and the invariant
it violated, so the application layer can map it without parsing messages.
"""

from typing import Any, Dict, Optional

from services.common.http_errors import ErrorCode, ServiceError, ValidationError

DETECTOR = "detector"
GENERATOR = "generator"
SCORER = "scorer"
STRATEGIST = "strategist"
ENGINE = "engine"


class SchedulingValidationError(ValidationError):
    """Malformed input rejected at a scheduling function boundary."""

    def __init__(
        self,
        message: str,
        component: str,
        invariant: str,
        code: ErrorCode,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            field=field,
            value=value,
            details={**(details or {}), "component": component, "invariant": invariant},
            code=code,
        )
        self.component = component
        self.invariant = invariant


class InvalidWindow(SchedulingValidationError):
    def __init__(self, component: str, start: Any, end: Any, field: str = "window"):
        super().__init__(
            f"Time window must start before it ends (start={start}, end={end})",
            component=component,
            invariant="start < end",
            code=ErrorCode.INVALID_WINDOW,
            field=field,
            details={"start": str(start), "end": str(end)},
        )


class InvalidDuration(SchedulingValidationError):
    def __init__(self, component: str, duration_minutes: Any):
        super().__init__(
            f"Meeting duration must be a positive number of minutes, got {duration_minutes}",
            component=component,
            invariant="duration_minutes > 0",
            code=ErrorCode.INVALID_DURATION,
            field="duration_minutes",
            value=duration_minutes,
        )


class EmptyParticipantSet(SchedulingValidationError):
    def __init__(self, component: str):
        super().__init__(
            "At least one participant (the organizer) is required",
            component=component,
            invariant="len(participants) >= 1",
            code=ErrorCode.EMPTY_PARTICIPANT_SET,
            field="participants",
        )


class SourceError(ServiceError):
    """A calendar source failed to supply busy intervals."""

    def __init__(self, participant_id: str, cause: Exception):
        super().__init__(
            f"Failed to load busy intervals for participant {participant_id}",
            details={
                "participant_id": participant_id,
                "error_type": type(cause).__name__,
            },
            code=ErrorCode.SOURCE_ERROR,
        )
        self.participant_id = participant_id
        self.cause = cause
