"""
Scheduling engine models.
"""

from services.scheduling.models.calendar import (
    BLOCKING_PRIORITIES,
    AvailabilityReport,
    AvailabilityResult,
    AvailabilityStatus,
    AvailabilitySummary,
    BusyInterval,
    Flexibility,
    MeetingRequest,
    Priority,
    TimeWindow,
    classify_flexibility,
)
from services.scheduling.models.preferences import SchedulingPreferences, WorkingHours
from services.scheduling.models.strategies import (
    IMPACT_WEIGHTS,
    Level,
    ParticipantImpact,
    ParticipantImpactLevel,
    Recommendation,
    RecommendationPriority,
    ReschedulePlan,
    ReschedulingAdvice,
    ReschedulingImpact,
    ResolutionStrategy,
    RiskLevel,
    SchedulingOutcome,
    StrategyType,
)
from services.scheduling.models.suggestions import (
    ConflictLevel,
    OptimalTimesResult,
    ScoredSlot,
    SearchCriteria,
)

__all__ = [
    "AvailabilityReport",
    "AvailabilityResult",
    "AvailabilityStatus",
    "AvailabilitySummary",
    "BLOCKING_PRIORITIES",
    "BusyInterval",
    "ConflictLevel",
    "Flexibility",
    "IMPACT_WEIGHTS",
    "Level",
    "MeetingRequest",
    "OptimalTimesResult",
    "ParticipantImpact",
    "ParticipantImpactLevel",
    "Priority",
    "Recommendation",
    "RecommendationPriority",
    "ReschedulePlan",
    "ReschedulingAdvice",
    "ReschedulingImpact",
    "ResolutionStrategy",
    "RiskLevel",
    "SchedulingOutcome",
    "SchedulingPreferences",
    "ScoredSlot",
    "SearchCriteria",
    "StrategyType",
    "TimeWindow",
    "WorkingHours",
    "classify_flexibility",
]
