import enum
from typing import List

from pydantic import BaseModel

from services.scheduling.models.calendar import TimeWindow
from services.scheduling.models.preferences import SchedulingPreferences


class ConflictLevel(str, enum.Enum):
    none = "none"
    low = "low"


class ScoredSlot(BaseModel):
    """A candidate window with its desirability score."""

    window: TimeWindow
    score: float
    reasons: List[str] = []
    conflict_level: ConflictLevel = ConflictLevel.none
    conflict_count: int = 0

    @property
    def reasoning(self) -> str:
        return ", ".join(self.reasons) or "Standard availability"


class SearchCriteria(BaseModel):
    participants: int
    duration_minutes: int
    time_horizon_days: int
    preferences: SchedulingPreferences


class OptimalTimesResult(BaseModel):
    suggestions: List[ScoredSlot] = []
    confidence: int = 0
    reasoning: str
    search_criteria: SearchCriteria
