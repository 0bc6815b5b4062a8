"""
Heuristic slot scoring and ranking.

Scores start from a base of 100 and add bonuses or penalties for time of
day, day of week, conflict density and caller preferences. Scores are
clamped at zero; there is no upper bound.
"""

from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from services.common.logging_config import get_logger
from services.scheduling.exceptions import SCORER
from services.scheduling.models import (
    ConflictLevel,
    SchedulingPreferences,
    ScoredSlot,
    TimeWindow,
)
from services.scheduling.services.conflict_detector import require_valid_window

logger = get_logger(__name__)

MONDAY, FRIDAY = 0, 4
MIDWEEK = frozenset({1, 2, 3})
WEEK_EDGES = frozenset({MONDAY, FRIDAY})
WEEKEND = frozenset({5, 6})

PEAK_HOURS = frozenset({10, 11})
POST_LUNCH_HOURS = frozenset({14, 15})
SHOULDER_HOURS = frozenset({9, 16})


class ScoringWeights(BaseModel):
    """Bonus and penalty magnitudes used by the scorer."""

    model_config = ConfigDict(frozen=True)

    base: float = 100
    peak_hours_bonus: float = 25
    post_lunch_bonus: float = 20
    shoulder_hours_bonus: float = 10
    off_hours_penalty: float = 40
    midweek_bonus: float = 15
    week_edge_bonus: float = 8
    weekend_penalty: float = 50
    conflict_penalty: float = 20
    preference_bonus: float = 15
    avoided_day_penalty: float = 25
    highly_recommended_above: float = 80


DEFAULT_WEIGHTS = ScoringWeights()


def score_slot(
    window: TimeWindow,
    conflict_count: int = 0,
    preferences: Optional[SchedulingPreferences] = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> ScoredSlot:
    """
    Score one candidate window.

    Args:
        window: Candidate meeting window; its start's local hour and weekday are used
        conflict_count: Busy intervals overlapping the window across all participants
        preferences: Caller preferences, defaults when omitted
        weights: Magnitudes table

    Returns:
        ScoredSlot with the clamped score and the reasons that fired
    """
    require_valid_window(window, SCORER)
    preferences = preferences or SchedulingPreferences()
    hour = window.start.hour
    weekday = window.start.weekday()

    score = weights.base
    reasons: List[str] = []

    if hour in PEAK_HOURS:
        score += weights.peak_hours_bonus
        reasons.append("Peak productivity time")
    elif hour in POST_LUNCH_HOURS:
        score += weights.post_lunch_bonus
        reasons.append("Post-lunch energy")
    elif hour in SHOULDER_HOURS:
        score += weights.shoulder_hours_bonus
    elif hour < 9 or hour > 16:
        score -= weights.off_hours_penalty

    if weekday in MIDWEEK:
        score += weights.midweek_bonus
        reasons.append("Mid-week focus")
    elif weekday in WEEK_EDGES:
        score += weights.week_edge_bonus
    elif weekday in WEEKEND:
        score -= weights.weekend_penalty

    score -= conflict_count * weights.conflict_penalty
    if conflict_count == 0:
        reasons.append("No scheduling conflicts")
    else:
        reasons.append("Minimal conflicts")

    if preferences.prefer_morning and hour < 12:
        score += weights.preference_bonus
    if preferences.prefer_afternoon and hour >= 12:
        score += weights.preference_bonus
    if preferences.avoid_mondays and weekday == MONDAY:
        score -= weights.avoided_day_penalty
    if preferences.avoid_fridays and weekday == FRIDAY:
        score -= weights.avoided_day_penalty

    score = max(0.0, score)
    if score > weights.highly_recommended_above:
        reasons.append("Highly recommended")

    return ScoredSlot(
        window=window,
        score=score,
        reasons=reasons,
        conflict_level=ConflictLevel.low if conflict_count > 0 else ConflictLevel.none,
        conflict_count=conflict_count,
    )


def rank_slots(slots: Iterable[ScoredSlot], limit: Optional[int] = None) -> List[ScoredSlot]:
    """Best score first; equal scores keep chronological order."""
    ranked = sorted(slots, key=lambda s: (-s.score, s.window.start))
    return ranked if limit is None else ranked[:limit]


def calculate_confidence(slots: Iterable[ScoredSlot]) -> int:
    """
    Composite 0-100 confidence for a suggestion set.

    Multiplies the normalized average and best scores, so it rewards sets
    whose best slot is strong and whose other slots are consistently good.
    This is a heuristic, not a statistical confidence.
    """
    scores = [slot.score for slot in slots]
    if not scores:
        return 0
    avg_score = sum(scores) / len(scores)
    max_score = max(scores)
    return round((avg_score / 100) * (max_score / 100) * 100)


def describe_top_slot(slot: Optional[ScoredSlot]) -> str:
    if slot is None:
        return "No optimal time found"

    start = slot.window.start
    hour = start.hour
    reasoning = f"{start:%A} at {start:%H:%M} is optimal because "
    if hour in PEAK_HOURS:
        reasoning += "it's during peak productivity hours, "
    if hour in POST_LUNCH_HOURS:
        reasoning += "it's after lunch when people are re-energized, "
    if slot.conflict_count == 0:
        reasoning += "there are no scheduling conflicts, "
    return reasoning + "and it aligns with typical business hours."
