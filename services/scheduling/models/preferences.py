from typing import List

from pydantic import BaseModel, Field, field_validator, model_validator

WEEKDAYS = [0, 1, 2, 3, 4]  # date.weekday(): Monday=0 ... Sunday=6
WEEKEND = frozenset({5, 6})


class WorkingHours(BaseModel):
    start: int = Field(9, ge=0, le=23, description="First hour a meeting may start")
    end: int = Field(17, ge=1, le=24, description="Hour by which meetings must end")

    @model_validator(mode="after")
    def validate_hour_range(self) -> "WorkingHours":
        if self.start >= self.end:
            raise ValueError("Working hours must end after they start")
        return self


class SchedulingPreferences(BaseModel):
    """Caller preferences applied to candidate generation and scoring."""

    working_hours: WorkingHours = Field(default_factory=WorkingHours)
    preferred_days: List[int] = Field(
        default_factory=lambda: list(WEEKDAYS),
        description="Weekdays (Monday=0) searched even when weekends are excluded",
    )
    include_weekends: bool = False
    prefer_morning: bool = False
    prefer_afternoon: bool = False
    avoid_mondays: bool = False
    avoid_fridays: bool = False
    time_horizon_days: int = Field(14, ge=1, le=365)

    @field_validator("preferred_days")
    @classmethod
    def validate_days(cls, v: List[int]) -> List[int]:
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f"Invalid weekday {day}. Use 0 (Monday) to 6 (Sunday)")
        return v

    def allows_day(self, weekday: int) -> bool:
        """Weekends are searched only when included or explicitly preferred."""
        if weekday in WEEKEND:
            return self.include_weekends or weekday in self.preferred_days
        return True
