"""
Interval conflict detection.

Works on half-open intervals: ``[10:00, 11:00)`` and ``[11:00, 12:00)`` touch
but do not conflict.
"""

from bisect import bisect_left
from typing import Dict, Iterable, List, Optional, Sequence, Union

from services.common.logging_config import get_logger
from services.scheduling.exceptions import DETECTOR, InvalidWindow
from services.scheduling.models import (
    BLOCKING_PRIORITIES,
    AvailabilityReport,
    AvailabilityResult,
    AvailabilityStatus,
    BusyInterval,
    TimeWindow,
)

logger = get_logger(__name__)


Span = Union[TimeWindow, BusyInterval]


def overlaps(a: Span, b: Span) -> bool:
    """True if two half-open spans share any instant."""
    return a.start < b.end and b.start < a.end


def require_valid_window(window: Span, component: str, field: str = "window") -> None:
    if window.start >= window.end:
        raise InvalidWindow(component, window.start, window.end, field=field)


def derive_status(conflicts: Sequence[BusyInterval]) -> AvailabilityStatus:
    if any(c.priority in BLOCKING_PRIORITIES for c in conflicts):
        return AvailabilityStatus.busy
    if conflicts:
        return AvailabilityStatus.tentative
    return AvailabilityStatus.available


def _relevant_intervals(
    busy_intervals: Iterable[BusyInterval],
    participant_ids: Optional[Iterable[str]],
    exclude_event_id: Optional[str],
    component: str,
) -> List[BusyInterval]:
    wanted = set(participant_ids) if participant_ids is not None else None
    relevant = []
    for interval in busy_intervals:
        if wanted is not None and interval.participant_id not in wanted:
            continue
        if exclude_event_id is not None and interval.event_id == exclude_event_id:
            continue
        require_valid_window(interval, component, field="busy_intervals")
        relevant.append(interval)
    return relevant


def check_availability(
    participant_ids: Sequence[str],
    window: TimeWindow,
    busy_intervals: Iterable[BusyInterval],
    exclude_event_id: Optional[str] = None,
) -> AvailabilityReport:
    """
    Report each participant's availability for ``window``.

    Every requested participant gets exactly one result, including those
    with no busy intervals at all. ``can_schedule`` is False only when some
    participant is busy; tentative holds do not block.

    Args:
        participant_ids: Participants to check; duplicates are collapsed
        window: The requested meeting time
        busy_intervals: Materialized busy intervals for (at least) these participants
        exclude_event_id: Event being moved, whose own interval is ignored

    Raises:
        InvalidWindow: ``window`` or one of the relevant intervals is empty or reversed
    """
    require_valid_window(window, DETECTOR)
    requested = list(dict.fromkeys(participant_ids))

    by_participant: Dict[str, List[BusyInterval]] = {pid: [] for pid in requested}
    for interval in _relevant_intervals(
        busy_intervals, requested, exclude_event_id, DETECTOR
    ):
        if overlaps(interval, window):
            by_participant[interval.participant_id].append(interval)

    results = [
        AvailabilityResult(
            participant_id=pid,
            conflicts=sorted(conflicts, key=lambda c: (c.start, c.end)),
            status=derive_status(conflicts),
        )
        for pid, conflicts in by_participant.items()
    ]
    can_schedule = all(r.status != AvailabilityStatus.busy for r in results)

    logger.debug(
        "Availability checked",
        participants=len(results),
        window_start=window.start.isoformat(),
        window_end=window.end.isoformat(),
        can_schedule=can_schedule,
    )
    return AvailabilityReport(
        window=window, participants=results, can_schedule=can_schedule
    )


class ConflictDensityMap:
    """
    Precomputed index for counting busy intervals over many candidate windows.

    Intervals are sorted by start so a lookup only scans intervals that
    begin before the candidate ends.
    """

    def __init__(
        self,
        busy_intervals: Iterable[BusyInterval],
        participant_ids: Optional[Iterable[str]] = None,
        exclude_event_id: Optional[str] = None,
    ):
        relevant = _relevant_intervals(
            busy_intervals, participant_ids, exclude_event_id, DETECTOR
        )
        self._intervals = sorted(relevant, key=lambda i: (i.start, i.end))
        self._starts = [i.start for i in self._intervals]

    def __len__(self) -> int:
        return len(self._intervals)

    def overlapping(self, window: Span) -> List[BusyInterval]:
        cutoff = bisect_left(self._starts, window.end)
        return [i for i in self._intervals[:cutoff] if i.end > window.start]

    def count(self, window: Span) -> int:
        return len(self.overlapping(window))

    def blocks(self, window: Span) -> bool:
        """True if any participant would be busy during ``window``."""
        return any(i.priority in BLOCKING_PRIORITIES for i in self.overlapping(window))


def conflict_density(
    window: TimeWindow,
    busy_intervals: Iterable[BusyInterval],
    participant_ids: Optional[Iterable[str]] = None,
) -> int:
    """Number of busy intervals, across all participants, overlapping ``window``."""
    require_valid_window(window, DETECTOR)
    return ConflictDensityMap(busy_intervals, participant_ids).count(window)
