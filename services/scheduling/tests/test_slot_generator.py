"""
Tests for candidate slot generation.
"""

from datetime import timedelta, timezone

import pytest

from services.scheduling.exceptions import InvalidDuration
from services.scheduling.models import SchedulingPreferences, WorkingHours
from services.scheduling.services.slot_generator import (
    generate_candidates,
    slots_per_day,
)
from services.scheduling.tests.scheduling_test_base import (
    MONDAY,
    SATURDAY,
    TUESDAY,
    WEDNESDAY,
    BaseSchedulingTest,
    at,
)


class TestGenerateCandidates(BaseSchedulingTest):
    def test_thirty_minute_slots_on_one_day(self):
        candidates = list(generate_candidates(["alice"], 30, MONDAY, 1))

        assert len(candidates) == 15
        assert candidates[0].start == at(MONDAY, 9)
        assert candidates[-1].start == at(MONDAY, 16)
        assert candidates[-1].end == at(MONDAY, 16, 30)

    def test_candidates_are_aligned_and_within_working_hours(self):
        for candidate in generate_candidates(["alice"], 45, MONDAY, 5):
            assert candidate.start.minute in (0, 30)
            assert candidate.start.hour >= 9
            assert candidate.end <= at(candidate.start, 17)
            assert candidate.duration_minutes == 45

    def test_last_start_leaves_room_for_whole_hours(self):
        candidates = list(generate_candidates(["alice"], 90, MONDAY, 1))

        assert len(candidates) == 13
        assert candidates[-1].start == at(MONDAY, 15)
        assert candidates[-1].end == at(MONDAY, 16, 30)

    def test_candidates_are_chronological(self):
        candidates = list(generate_candidates(["alice"], 60, MONDAY, 14))
        starts = [c.start for c in candidates]
        assert starts == sorted(starts)

    def test_weekends_skipped_by_default(self):
        candidates = list(generate_candidates(["alice"], 30, MONDAY, 7))

        assert len(candidates) == 5 * 15
        assert all(c.start.weekday() < 5 for c in candidates)

    def test_weekends_included_on_request(self):
        preferences = SchedulingPreferences(include_weekends=True)
        candidates = list(generate_candidates(["alice"], 30, MONDAY, 7, preferences))
        assert len(candidates) == 7 * 15

    def test_preferred_weekend_day_is_searched(self):
        preferences = SchedulingPreferences(preferred_days=[0, 1, 2, 3, 4, 5])
        candidates = list(generate_candidates(["alice"], 30, MONDAY, 7, preferences))

        assert len(candidates) == 6 * 15
        assert {c.start.weekday() for c in candidates} == {0, 1, 2, 3, 4, 5}

    def test_weekend_only_horizon_is_empty(self):
        assert list(generate_candidates(["alice"], 30, SATURDAY, 2)) == []

    def test_custom_working_hours(self):
        preferences = SchedulingPreferences(
            working_hours=WorkingHours(start=8, end=12)
        )
        candidates = list(generate_candidates(["alice"], 60, MONDAY, 1, preferences))

        assert [c.start.hour for c in candidates][0] == 8
        assert candidates[-1].start == at(MONDAY, 11)
        assert len(candidates) == 7

    def test_mid_day_horizon_start_bounds_candidates(self):
        candidates = list(generate_candidates(["alice"], 30, at(MONDAY, 12), 2))

        assert candidates[0].start == at(MONDAY, 12)
        assert all(c.start >= at(MONDAY, 12) for c in candidates)
        assert all(c.end <= at(WEDNESDAY, 12) for c in candidates)
        # Monday afternoon plus all of Tuesday
        assert len(candidates) == 9 + 15

    def test_horizon_ending_mid_day_yields_nothing_on_that_day(self):
        # Horizon ends Tuesday 12:00; Tuesday morning is not a searched day
        candidates = list(generate_candidates(["alice"], 30, at(MONDAY, 12), 1))

        assert {c.start.date() for c in candidates} == {MONDAY.date()}
        assert [c.start for c in candidates][:2] == [
            at(MONDAY, 12),
            at(MONDAY, 12, 30),
        ]
        assert candidates[-1].start == at(MONDAY, 16)
        assert len(candidates) == 9

    def test_morning_starts_before_horizon_start_are_dropped(self):
        candidates = list(generate_candidates(["alice"], 60, at(MONDAY, 10, 15), 1))

        # 10:00 would start before the horizon; 10:30 is the first kept start
        assert candidates[0].start == at(MONDAY, 10, 30)
        assert all(c.start >= at(MONDAY, 10, 15) for c in candidates)
        assert len(candidates) == 12

    def test_timezone_follows_horizon_start(self):
        tz = timezone(timedelta(hours=-5))
        horizon_start = MONDAY.replace(tzinfo=tz)

        candidates = list(generate_candidates(["alice"], 30, horizon_start, 1))

        assert all(c.start.tzinfo == tz for c in candidates)
        assert candidates[0].start.hour == 9

    def test_duration_longer_than_working_day_yields_nothing(self):
        assert list(generate_candidates(["alice"], 9 * 60, MONDAY, 7)) == []

    def test_non_positive_horizon_yields_nothing(self):
        assert list(generate_candidates(["alice"], 30, MONDAY, 0)) == []

    @pytest.mark.parametrize("duration", [0, -30])
    def test_invalid_duration_raises_on_call(self, duration):
        with pytest.raises(InvalidDuration) as exc_info:
            generate_candidates(["alice"], duration, MONDAY, 7)

        assert exc_info.value.component == "generator"
        assert exc_info.value.field == "duration_minutes"

    def test_is_lazy(self):
        candidates = generate_candidates(["alice"], 30, MONDAY, 365)

        first = next(candidates)

        assert first.start == at(MONDAY, 9)


class TestSlotsPerDay:
    @pytest.mark.parametrize(
        "duration,expected",
        [(30, 15), (60, 15), (61, 13), (120, 13), (8 * 60, 1), (8 * 60 + 1, 0)],
    )
    def test_default_working_hours(self, duration, expected):
        assert slots_per_day(duration, SchedulingPreferences()) == expected
