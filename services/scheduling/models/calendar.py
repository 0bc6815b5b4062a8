"""
Calendar-side models: busy intervals, time windows and availability results.
"""

import enum
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

FLEXIBLE_CATEGORIES = frozenset({"standup", "check-in", "update"})


class Priority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


BLOCKING_PRIORITIES = frozenset({Priority.high, Priority.urgent})


class Flexibility(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class AvailabilityStatus(str, enum.Enum):
    available = "available"
    tentative = "tentative"
    busy = "busy"


def classify_flexibility(
    category: Optional[str], priority: Priority | str = Priority.medium
) -> Flexibility:
    """How easily an existing event can be moved out of the way.

    Recurring syncs (standups, check-ins, updates) move easily, low-priority
    events somewhat, everything else not at all.
    """
    if category and category.strip().lower() in FLEXIBLE_CATEGORIES:
        return Flexibility.high
    if priority == Priority.low:
        return Flexibility.medium
    return Flexibility.low


class TimeWindow(BaseModel):
    """A half-open span of time ``[start, end)``."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)


class BusyInterval(BaseModel):
    """One committed event on a participant's calendar."""

    model_config = ConfigDict(frozen=True)

    participant_id: str
    start: datetime
    end: datetime
    priority: Priority = Priority.medium
    flexible: bool = False
    event_id: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = Field(
        None, description="Event type such as standup, review or 1:1"
    )

    @model_validator(mode="before")
    @classmethod
    def default_flexibility(cls, data: Any) -> Any:
        """Derive ``flexible`` from category and priority unless given."""
        if isinstance(data, dict) and data.get("flexible") is None:
            flexibility = classify_flexibility(
                data.get("category"), data.get("priority", Priority.medium)
            )
            data = {**data, "flexible": flexibility != Flexibility.low}
        return data

    @property
    def window(self) -> TimeWindow:
        return TimeWindow.model_construct(start=self.start, end=self.end)


class AvailabilityResult(BaseModel):
    participant_id: str
    conflicts: List[BusyInterval] = []
    status: AvailabilityStatus = AvailabilityStatus.available

    @computed_field  # type: ignore[prop-decorator]
    @property
    def conflict_count(self) -> int:
        return len(self.conflicts)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def high_priority_conflicts(self) -> int:
        return sum(1 for c in self.conflicts if c.priority in BLOCKING_PRIORITIES)


class AvailabilitySummary(BaseModel):
    available: int = 0
    tentative: int = 0
    busy: int = 0
    total: int = 0


class AvailabilityReport(BaseModel):
    """Availability of every requested participant for one window."""

    window: TimeWindow
    participants: List[AvailabilityResult] = []
    can_schedule: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def duration_minutes(self) -> int:
        return self.window.duration_minutes

    @computed_field  # type: ignore[prop-decorator]
    @property
    def summary(self) -> AvailabilitySummary:
        counts = {status: 0 for status in AvailabilityStatus}
        for result in self.participants:
            counts[result.status] += 1
        return AvailabilitySummary(
            available=counts[AvailabilityStatus.available],
            tentative=counts[AvailabilityStatus.tentative],
            busy=counts[AvailabilityStatus.busy],
            total=len(self.participants),
        )

    @property
    def has_conflicts(self) -> bool:
        return any(result.conflicts for result in self.participants)

    @property
    def conflicting_intervals(self) -> List[BusyInterval]:
        """Every conflicting interval, once, in participant order."""
        seen = set()
        intervals = []
        for result in self.participants:
            for interval in result.conflicts:
                if interval not in seen:
                    seen.add(interval)
                    intervals.append(interval)
        return intervals


class MeetingRequest(BaseModel):
    """The meeting someone is trying to place."""

    organizer_id: Optional[str] = None
    participant_ids: List[str] = []
    window: TimeWindow
    priority: Priority = Priority.medium
    title: Optional[str] = None
    exclude_event_id: Optional[str] = Field(
        None, description="Event being rescheduled, ignored when checking conflicts"
    )

    @property
    def all_participants(self) -> List[str]:
        """Organizer first, then participants, without duplicates."""
        ids = ([self.organizer_id] if self.organizer_id else []) + self.participant_ids
        return list(dict.fromkeys(ids))

    @property
    def duration_minutes(self) -> int:
        return self.window.duration_minutes
