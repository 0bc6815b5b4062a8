"""
Candidate slot generation over a search horizon.
"""

import math
from datetime import datetime, time, timedelta
from typing import Iterator, Optional, Sequence

from services.common.logging_config import get_logger
from services.scheduling.exceptions import GENERATOR, InvalidDuration
from services.scheduling.models import SchedulingPreferences, TimeWindow

logger = get_logger(__name__)

SLOT_STEP_MINUTES = 30


def slots_per_day(duration_minutes: int, preferences: SchedulingPreferences) -> int:
    """Number of half-hour aligned starts that fit one working day."""
    hours = preferences.working_hours
    last_start_hour = hours.end - math.ceil(duration_minutes / 60)
    if last_start_hour < hours.start:
        return 0
    return (last_start_hour - hours.start) * 60 // SLOT_STEP_MINUTES + 1


def generate_candidates(
    participant_ids: Sequence[str],
    duration_minutes: int,
    horizon_start: datetime,
    horizon_days: int,
    preferences: Optional[SchedulingPreferences] = None,
) -> Iterator[TimeWindow]:
    """
    Yield candidate meeting windows in chronological order.

    Each kept day contributes half-hour aligned starts from the beginning of
    working hours up to ``working_hours.end - ceil(duration / 60)``, so every
    candidate ends within working hours. Weekend days are skipped unless the
    preferences include weekends or list the day explicitly. Candidates are
    built in ``horizon_start``'s timezone and never fall outside
    ``[horizon_start, horizon_start + horizon_days)``.

    The generator does not consult calendars; ``participant_ids`` is part of
    the call so callers can pass one request object around, conflicts are
    resolved by the detector or a ``ConflictDensityMap``.

    Raises:
        InvalidDuration: ``duration_minutes`` is not positive. Raised on call,
            before iteration starts.
    """
    if duration_minutes <= 0:
        raise InvalidDuration(GENERATOR, duration_minutes)
    preferences = preferences or SchedulingPreferences()

    per_day = slots_per_day(duration_minutes, preferences)
    if per_day == 0 or horizon_days <= 0:
        logger.debug(
            "No candidates possible",
            duration_minutes=duration_minutes,
            horizon_days=horizon_days,
        )
        return iter(())

    return _iter_candidates(
        duration_minutes, horizon_start, horizon_days, preferences, per_day
    )


def _iter_candidates(
    duration_minutes: int,
    horizon_start: datetime,
    horizon_days: int,
    preferences: SchedulingPreferences,
    per_day: int,
) -> Iterator[TimeWindow]:
    horizon_end = horizon_start + timedelta(days=horizon_days)
    duration = timedelta(minutes=duration_minutes)
    first_start = time(preferences.working_hours.start)
    first_day = horizon_start.date()

    for day_offset in range(horizon_days):
        day = first_day + timedelta(days=day_offset)
        if not preferences.allows_day(day.weekday()):
            continue

        day_open = datetime.combine(day, first_start, tzinfo=horizon_start.tzinfo)
        for step in range(per_day):
            start = day_open + timedelta(minutes=step * SLOT_STEP_MINUTES)
            end = start + duration
            if start < horizon_start or end > horizon_end:
                continue
            yield TimeWindow(start=start, end=end)
