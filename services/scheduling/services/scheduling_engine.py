"""Scheduling engine: ties detection, generation, scoring and strategy together."""

from datetime import datetime, time, timedelta
from typing import Iterable, List, Optional, Sequence

from services.common.logging_config import get_logger
from services.scheduling.exceptions import ENGINE, EmptyParticipantSet, InvalidDuration
from services.scheduling.models import (
    BusyInterval,
    Level,
    MeetingRequest,
    OptimalTimesResult,
    ParticipantImpact,
    ParticipantImpactLevel,
    ReschedulePlan,
    ReschedulingAdvice,
    ReschedulingImpact,
    SchedulingOutcome,
    SchedulingPreferences,
    ScoredSlot,
    SearchCriteria,
    TimeWindow,
    WorkingHours,
)
from services.scheduling.services.conflict_detector import (
    ConflictDensityMap,
    check_availability,
    require_valid_window,
)
from services.scheduling.services.resolution_strategist import (
    build_recommendations,
    calculate_conflict_risk,
    propose_resolution_strategies,
)
from services.scheduling.services.slot_generator import generate_candidates
from services.scheduling.services.slot_scorer import (
    DEFAULT_WEIGHTS,
    ScoringWeights,
    calculate_confidence,
    describe_top_slot,
    rank_slots,
    score_slot,
)
from services.scheduling.settings import Settings, get_settings

logger = get_logger(__name__)


class SchedulingEngine:
    """
    Stateless scheduling facade.

    Holds configuration only; every call is a pure function of its
    arguments, so one engine can serve concurrent requests.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
    ):
        self.settings = settings or get_settings()
        self.weights = weights

    def default_preferences(self) -> SchedulingPreferences:
        return SchedulingPreferences(
            working_hours=WorkingHours(
                start=self.settings.working_hours_start,
                end=self.settings.working_hours_end,
            ),
            time_horizon_days=self.settings.default_horizon_days,
        )

    def schedule(
        self,
        request: MeetingRequest,
        busy_intervals: Iterable[BusyInterval],
        preferences: Optional[SchedulingPreferences] = None,
    ) -> SchedulingOutcome:
        """
        Check a requested meeting and, if it conflicts, propose a way forward.

        A request without conflicts comes back schedulable and bare. A
        conflicting one gets ranked alternative slots, resolution strategies,
        recommendations and a risk level. ``schedulable`` follows the
        detector: tentative holds alone do not block the request.
        """
        participants = request.all_participants
        if not participants:
            raise EmptyParticipantSet(ENGINE)
        preferences = preferences or self.default_preferences()
        busy_intervals = list(busy_intervals)

        report = check_availability(
            participants, request.window, busy_intervals, request.exclude_event_id
        )
        if not report.has_conflicts:
            logger.info(
                "Meeting can be scheduled as requested",
                participants=len(participants),
                start=request.window.start.isoformat(),
            )
            return SchedulingOutcome(availability=report, schedulable=True)

        alternatives = self.find_alternatives(request, busy_intervals, preferences)
        strategies = propose_resolution_strategies(report, request)
        risk_level = calculate_conflict_risk(
            len(report.conflicting_intervals),
            len(participants),
            request.duration_minutes,
        )

        logger.info(
            "Scheduling conflicts detected",
            can_schedule=report.can_schedule,
            busy=report.summary.busy,
            tentative=report.summary.tentative,
            alternatives=len(alternatives),
            risk_level=risk_level.value,
        )
        return SchedulingOutcome(
            availability=report,
            schedulable=report.can_schedule,
            alternatives=alternatives,
            strategies=strategies,
            recommendations=build_recommendations(strategies),
            risk_level=risk_level,
        )

    def find_alternatives(
        self,
        request: MeetingRequest,
        busy_intervals: Iterable[BusyInterval],
        preferences: Optional[SchedulingPreferences] = None,
    ) -> List[ScoredSlot]:
        """Schedulable slots of the same length in the days following the request."""
        require_valid_window(request.window, ENGINE)
        preferences = preferences or self.default_preferences()
        participants = request.all_participants

        requested_day = datetime.combine(
            request.window.start.date(), time.min, tzinfo=request.window.start.tzinfo
        )
        density = ConflictDensityMap(
            busy_intervals, participants, request.exclude_event_id
        )

        slots = [
            score_slot(candidate, density.count(candidate), preferences, self.weights)
            for candidate in generate_candidates(
                participants,
                request.duration_minutes,
                requested_day,
                self.settings.alternative_search_days,
                preferences,
            )
            if not density.blocks(candidate)
        ]
        return rank_slots(slots, self.settings.max_alternatives)

    def find_optimal_times(
        self,
        participant_ids: Sequence[str],
        duration_minutes: int,
        busy_intervals: Iterable[BusyInterval],
        horizon_start: datetime,
        preferences: Optional[SchedulingPreferences] = None,
        limit: Optional[int] = None,
        exclude_event_id: Optional[str] = None,
    ) -> OptimalTimesResult:
        """
        Rank every candidate over the preference horizon.

        Candidates are scored against their conflict density rather than
        filtered, so busy stretches sink instead of disappearing. Confidence
        is computed over the whole scored set, not only the returned top.
        """
        participants = list(dict.fromkeys(participant_ids))
        if not participants:
            raise EmptyParticipantSet(ENGINE)
        if duration_minutes <= 0:
            raise InvalidDuration(ENGINE, duration_minutes)
        preferences = preferences or self.default_preferences()
        if limit is None:
            limit = self.settings.max_suggestions

        density = ConflictDensityMap(busy_intervals, participants, exclude_event_id)
        scored = rank_slots(
            score_slot(candidate, density.count(candidate), preferences, self.weights)
            for candidate in generate_candidates(
                participants,
                duration_minutes,
                horizon_start,
                preferences.time_horizon_days,
                preferences,
            )
        )
        suggestions = scored[:limit]

        logger.info(
            "Optimal times computed",
            participants=len(participants),
            candidates=len(scored),
            returned=len(suggestions),
        )
        return OptimalTimesResult(
            suggestions=suggestions,
            confidence=calculate_confidence(scored),
            reasoning=describe_top_slot(suggestions[0] if suggestions else None),
            search_criteria=SearchCriteria(
                participants=len(participants),
                duration_minutes=duration_minutes,
                time_horizon_days=preferences.time_horizon_days,
                preferences=preferences,
            ),
        )

    def suggest_reschedule(
        self,
        request: MeetingRequest,
        busy_intervals: Iterable[BusyInterval],
        horizon_start: datetime,
        preferences: Optional[SchedulingPreferences] = None,
    ) -> ReschedulePlan:
        """New times for an existing meeting, ignoring its own calendar entry."""
        require_valid_window(request.window, ENGINE)
        optimal = self.find_optimal_times(
            request.all_participants,
            request.duration_minutes,
            busy_intervals,
            horizon_start,
            preferences,
            exclude_event_id=request.exclude_event_id,
        )
        return ReschedulePlan(
            current_window=request.window,
            participants=len(request.all_participants),
            suggestions=optimal.suggestions,
            impact=analyze_rescheduling_impact(
                request.window, request.all_participants, optimal.suggestions
            ),
        )


def _participant_impact(
    original: TimeWindow, replacement: Optional[TimeWindow]
) -> ParticipantImpactLevel:
    if replacement is None:
        return ParticipantImpactLevel.unknown
    # Whole hours, truncated
    hours = int(abs((replacement.start - original.start).total_seconds()) // 3600)
    if hours <= 2:
        return ParticipantImpactLevel.minimal
    if hours <= 24:
        return ParticipantImpactLevel.moderate
    return ParticipantImpactLevel.significant


def analyze_rescheduling_impact(
    original_window: TimeWindow,
    participant_ids: Sequence[str],
    suggestions: Sequence[ScoredSlot],
) -> ReschedulingImpact:
    """
    Estimate what moving a meeting to its best suggestion costs.

    Each participant is rated by how far the meeting moves; organizational
    impact grows with the number of participants.
    """
    replacement = suggestions[0].window if suggestions else None
    participants = list(dict.fromkeys(participant_ids))
    impacts = [
        ParticipantImpact(
            participant_id=pid, impact=_participant_impact(original_window, replacement)
        )
        for pid in participants
    ]

    if len(participants) > 10:
        organizational = Level.high
    elif len(participants) > 5:
        organizational = Level.medium
    else:
        organizational = Level.low

    advice = []
    if organizational == Level.high:
        advice.append(
            ReschedulingAdvice(
                type="communication",
                message="Schedule a brief announcement to explain the rescheduling",
                priority=Level.high,
            )
        )
    if any(i.impact == ParticipantImpactLevel.significant for i in impacts):
        advice.append(
            ReschedulingAdvice(
                type="compensation",
                message=(
                    "Consider providing alternative meeting formats for "
                    "significantly impacted participants"
                ),
                priority=Level.medium,
            )
        )
    advice.append(
        ReschedulingAdvice(
            type="notification",
            message="Send rescheduling notifications at least 24 hours in advance when possible",
            priority=Level.medium,
        )
    )

    return ReschedulingImpact(
        participants=impacts,
        organizational_impact=organizational,
        recommendations=advice,
    )
