"""
Conflict resolution strategies for a meeting that cannot be placed as asked.
"""

from typing import List

from services.common.logging_config import get_logger
from services.scheduling.exceptions import STRATEGIST, EmptyParticipantSet
from services.scheduling.models import (
    AvailabilityReport,
    Level,
    MeetingRequest,
    Recommendation,
    RecommendationPriority,
    ResolutionStrategy,
    RiskLevel,
    StrategyType,
)
from services.scheduling.services.conflict_detector import require_valid_window

logger = get_logger(__name__)

REDUCE_PARTICIPANTS_ABOVE = 3
SPLIT_MEETING_ABOVE_MINUTES = 60
ALTERNATIVE_RECOMMENDATIONS = 2

ESTIMATED_RESOLUTION_TIME = {
    Level.low: "< 5 minutes",
    Level.medium: "5-15 minutes",
    Level.high: "15-30 minutes",
}


def propose_resolution_strategies(
    report: AvailabilityReport, request: MeetingRequest
) -> List[ResolutionStrategy]:
    """
    Propose ways out of the conflicts in ``report``, best first.

    Strategies are ordered by ``impact weight * probability`` (high=3,
    medium=2, low=1); ties keep catalog order. A report without conflicts
    needs no strategy and yields an empty list.

    Raises:
        EmptyParticipantSet: the request names neither organizer nor participants
        InvalidWindow: the requested window is empty or reversed
    """
    participants = request.all_participants
    if not participants:
        raise EmptyParticipantSet(STRATEGIST)
    require_valid_window(request.window, STRATEGIST)

    if not report.has_conflicts:
        return []

    strategies = [
        ResolutionStrategy(
            type=StrategyType.reschedule,
            title="Find Alternative Time",
            description="Suggest optimal alternative times when all participants are available",
            effort=Level.low,
            impact=Level.high,
            probability=0.9,
        )
    ]

    if len(participants) > REDUCE_PARTICIPANTS_ABOVE:
        strategies.append(
            ResolutionStrategy(
                type=StrategyType.reduce_participants,
                title="Optimize Participant List",
                description="Remove non-essential participants to reduce conflicts",
                effort=Level.medium,
                impact=Level.medium,
                probability=0.7,
            )
        )

    if request.duration_minutes > SPLIT_MEETING_ABOVE_MINUTES:
        strategies.append(
            ResolutionStrategy(
                type=StrategyType.split_meeting,
                title="Split Into Multiple Sessions",
                description="Break into smaller, focused sessions with relevant participants",
                effort=Level.high,
                impact=Level.medium,
                probability=0.6,
            )
        )

    flexible = [i for i in report.conflicting_intervals if i.flexible]
    if flexible:
        strategies.append(
            ResolutionStrategy(
                type=StrategyType.override_conflicts,
                title="Override Flexible Meetings",
                description=(
                    f"Move {len(flexible)} flexible meetings to accommodate "
                    "this higher priority meeting"
                ),
                effort=Level.medium,
                impact=Level.high,
                probability=0.8,
            )
        )

    strategies.sort(key=lambda s: s.priority_score, reverse=True)
    logger.debug(
        "Resolution strategies proposed",
        strategies=[s.type.value for s in strategies],
        flexible_conflicts=len(flexible),
    )
    return strategies


def build_recommendations(strategies: List[ResolutionStrategy]) -> List[Recommendation]:
    """The first strategy as the primary recommendation, the next two as alternatives."""
    recommendations = []
    for rank, strategy in enumerate(
        strategies[: 1 + ALTERNATIVE_RECOMMENDATIONS], start=1
    ):
        recommendations.append(
            Recommendation(
                priority=(
                    RecommendationPriority.primary
                    if rank == 1
                    else RecommendationPriority.alternative
                ),
                rank=rank,
                strategy=strategy.type,
                title=strategy.title,
                description=strategy.description,
                confidence=round(strategy.probability * 100),
                estimated_time=ESTIMATED_RESOLUTION_TIME[strategy.effort],
            )
        )
    return recommendations


def calculate_conflict_risk(
    conflict_count: int, participant_count: int, duration_minutes: int
) -> RiskLevel:
    """Rough risk that a meeting of this shape keeps running into conflicts."""
    total_risk = conflict_count * 10 + participant_count * 2 + duration_minutes / 10
    if total_risk > 50:
        return RiskLevel.high
    if total_risk > 25:
        return RiskLevel.medium
    return RiskLevel.low
