"""
Async boundary between calendar data sources and the scheduling engine.

Busy intervals are fetched per participant concurrently, materialized, and
only then handed to the engine. The engine itself never awaits.
"""

import asyncio
from datetime import datetime, time, timedelta
from typing import List, Optional, Protocol, Sequence

from services.common.logging_config import get_logger
from services.scheduling.exceptions import SourceError
from services.scheduling.models import (
    AvailabilityReport,
    BusyInterval,
    MeetingRequest,
    OptimalTimesResult,
    SchedulingOutcome,
    SchedulingPreferences,
    TimeWindow,
)
from services.scheduling.services.conflict_detector import check_availability
from services.scheduling.services.scheduling_engine import SchedulingEngine

logger = get_logger(__name__)


class BusyIntervalSource(Protocol):
    """Anything that can list a participant's committed events in a range."""

    async def get_busy_intervals(
        self, participant_id: str, start: datetime, end: datetime
    ) -> List[BusyInterval]: ...


class AvailabilityService:
    def __init__(
        self, source: BusyIntervalSource, engine: Optional[SchedulingEngine] = None
    ):
        self.source = source
        self.engine = engine or SchedulingEngine()

    async def load_busy_intervals(
        self, participant_ids: Sequence[str], start: datetime, end: datetime
    ) -> List[BusyInterval]:
        """
        Fetch every participant's busy intervals in parallel and flatten them.

        All fetches run to completion; every failure is logged and the first
        failing participant, in request order, is raised as ``SourceError``.
        """
        participants = list(dict.fromkeys(participant_ids))
        results = await asyncio.gather(
            *(
                self.source.get_busy_intervals(pid, start, end)
                for pid in participants
            ),
            return_exceptions=True,
        )

        intervals: List[BusyInterval] = []
        failures = []
        for participant_id, result in zip(participants, results):
            if isinstance(result, Exception):
                logger.error(
                    "Calendar source failed",
                    participant_id=participant_id,
                    error=str(result),
                )
                failures.append((participant_id, result))
            elif isinstance(result, BaseException):
                raise result
            else:
                intervals.extend(result)

        if failures:
            participant_id, error = failures[0]
            raise SourceError(participant_id, error) from error

        logger.debug(
            "Busy intervals loaded",
            participants=len(participants),
            intervals=len(intervals),
        )
        return intervals

    async def check_availability(
        self,
        participant_ids: Sequence[str],
        window: TimeWindow,
        exclude_event_id: Optional[str] = None,
    ) -> AvailabilityReport:
        intervals = await self.load_busy_intervals(
            participant_ids, window.start, window.end
        )
        return check_availability(participant_ids, window, intervals, exclude_event_id)

    async def schedule(
        self,
        request: MeetingRequest,
        preferences: Optional[SchedulingPreferences] = None,
    ) -> SchedulingOutcome:
        # Cover both the requested window and the alternative search range
        search_start = datetime.combine(
            request.window.start.date(), time.min, tzinfo=request.window.start.tzinfo
        )
        search_end = max(
            request.window.end,
            search_start
            + timedelta(days=self.engine.settings.alternative_search_days),
        )
        intervals = await self.load_busy_intervals(
            request.all_participants, search_start, search_end
        )
        return self.engine.schedule(request, intervals, preferences)

    async def find_optimal_times(
        self,
        participant_ids: Sequence[str],
        duration_minutes: int,
        horizon_start: datetime,
        preferences: Optional[SchedulingPreferences] = None,
        limit: Optional[int] = None,
    ) -> OptimalTimesResult:
        preferences = preferences or self.engine.default_preferences()
        horizon_end = horizon_start + timedelta(days=preferences.time_horizon_days)
        intervals = await self.load_busy_intervals(
            participant_ids, horizon_start, horizon_end
        )
        return self.engine.find_optimal_times(
            participant_ids,
            duration_minutes,
            intervals,
            horizon_start,
            preferences,
            limit,
        )
