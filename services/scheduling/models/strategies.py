"""
Conflict resolution and rescheduling models.
"""

import enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field

from services.scheduling.models.calendar import AvailabilityReport, TimeWindow
from services.scheduling.models.suggestions import ScoredSlot


class StrategyType(str, enum.Enum):
    reschedule = "reschedule"
    reduce_participants = "reduce_participants"
    split_meeting = "split_meeting"
    override_conflicts = "override_conflicts"


class Level(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


IMPACT_WEIGHTS = {Level.high: 3, Level.medium: 2, Level.low: 1}


class ResolutionStrategy(BaseModel):
    type: StrategyType
    effort: Level
    impact: Level
    probability: float = Field(..., ge=0.0, le=1.0)
    title: str = ""
    description: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def priority_score(self) -> float:
        return IMPACT_WEIGHTS[self.impact] * self.probability


class RecommendationPriority(str, enum.Enum):
    primary = "primary"
    alternative = "alternative"


class Recommendation(BaseModel):
    priority: RecommendationPriority
    rank: int
    strategy: StrategyType
    title: str
    description: str
    confidence: int
    estimated_time: str


class RiskLevel(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class ParticipantImpactLevel(str, enum.Enum):
    minimal = "minimal"
    moderate = "moderate"
    significant = "significant"
    unknown = "unknown"


class ParticipantImpact(BaseModel):
    participant_id: str
    impact: ParticipantImpactLevel


class ReschedulingAdvice(BaseModel):
    type: str
    message: str
    priority: Level


class ReschedulingImpact(BaseModel):
    participants: List[ParticipantImpact] = []
    organizational_impact: Level = Level.low
    communication_required: bool = True
    recommendations: List[ReschedulingAdvice] = []


class SchedulingOutcome(BaseModel):
    """Everything the engine knows about one scheduling request."""

    availability: AvailabilityReport
    schedulable: bool
    alternatives: List[ScoredSlot] = []
    strategies: List[ResolutionStrategy] = []
    recommendations: List[Recommendation] = []
    risk_level: Optional[RiskLevel] = None


class ReschedulePlan(BaseModel):
    """Suggested new times for an existing meeting and what moving it costs."""

    current_window: TimeWindow
    participants: int
    suggestions: List[ScoredSlot] = []
    impact: ReschedulingImpact
