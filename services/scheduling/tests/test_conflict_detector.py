"""
Tests for interval conflict detection.
"""

from datetime import timedelta

import pytest

from services.scheduling.exceptions import InvalidWindow
from services.scheduling.models import (
    AvailabilityStatus,
    BusyInterval,
    Priority,
    TimeWindow,
)
from services.scheduling.services.conflict_detector import (
    ConflictDensityMap,
    check_availability,
    conflict_density,
    overlaps,
)
from services.scheduling.tests.scheduling_test_base import (
    MONDAY,
    TUESDAY,
    BaseSchedulingTest,
    at,
    busy,
    window,
)


class TestOverlaps:
    def test_partial_overlap_is_symmetric(self):
        a = window(MONDAY, (10, 0), (11, 0))
        b = window(MONDAY, (10, 30), (11, 30))
        assert overlaps(a, b) is True
        assert overlaps(b, a) is True

    def test_containment_is_symmetric(self):
        outer = window(MONDAY, (9, 0), (17, 0))
        inner = window(MONDAY, (12, 0), (12, 30))
        assert overlaps(outer, inner) is True
        assert overlaps(inner, outer) is True

    def test_touching_boundaries_do_not_overlap(self):
        a = window(MONDAY, (10, 0), (11, 0))
        b = window(MONDAY, (11, 0), (12, 0))
        assert overlaps(a, b) is False
        assert overlaps(b, a) is False

    def test_disjoint_windows(self):
        a = window(MONDAY, (9, 0), (10, 0))
        b = window(TUESDAY, (9, 0), (10, 0))
        assert overlaps(a, b) == overlaps(b, a) is False

    def test_window_against_busy_interval(self):
        interval = busy("alice", MONDAY, (14, 0), (15, 0))
        assert overlaps(window(MONDAY, (14, 30), (15, 0)), interval)
        assert overlaps(interval, window(MONDAY, (14, 30), (15, 0)))


class TestCheckAvailability(BaseSchedulingTest):
    """Test suite for check_availability."""

    def test_busy_participant_blocks_scheduling(self):
        intervals = [busy("alice", MONDAY, (14, 0), (15, 0), Priority.high)]

        report = check_availability(
            ["alice", "bob"], window(MONDAY, (14, 30), (15, 0)), intervals
        )

        statuses = {r.participant_id: r.status for r in report.participants}
        assert statuses == {
            "alice": AvailabilityStatus.busy,
            "bob": AvailabilityStatus.available,
        }
        assert report.can_schedule is False
        assert report.summary.busy == 1
        assert report.summary.available == 1
        assert report.summary.total == 2

    def test_boundary_touch_is_not_a_conflict(self):
        intervals = [busy("alice", MONDAY, (11, 0), (12, 0))]

        report = check_availability(
            ["alice"], window(MONDAY, (10, 0), (11, 0)), intervals
        )

        assert report.participants[0].status == AvailabilityStatus.available
        assert report.participants[0].conflicts == []
        assert report.can_schedule is True

    def test_low_priority_conflict_is_tentative(self):
        intervals = [busy("alice", MONDAY, (10, 0), (11, 0), Priority.low)]

        report = check_availability(
            ["alice"], window(MONDAY, (10, 30), (11, 30)), intervals
        )

        assert report.participants[0].status == AvailabilityStatus.tentative
        assert report.can_schedule is True
        assert report.has_conflicts is True

    def test_urgent_conflict_is_busy(self):
        intervals = [busy("alice", MONDAY, (10, 0), (11, 0), Priority.urgent)]

        report = check_availability(
            ["alice"], window(MONDAY, (10, 0), (11, 0)), intervals
        )

        assert report.participants[0].status == AvailabilityStatus.busy
        assert report.participants[0].high_priority_conflicts == 1

    def test_participants_without_data_are_reported_available(self):
        report = check_availability(
            ["alice", "bob", "carol"], window(MONDAY, (10, 0), (11, 0)), []
        )

        assert [r.participant_id for r in report.participants] == [
            "alice",
            "bob",
            "carol",
        ]
        assert all(
            r.status == AvailabilityStatus.available for r in report.participants
        )
        assert report.can_schedule is True

    def test_duplicate_participants_are_collapsed(self):
        report = check_availability(
            ["alice", "bob", "alice"], window(MONDAY, (10, 0), (11, 0)), []
        )
        assert [r.participant_id for r in report.participants] == ["alice", "bob"]

    def test_zero_participants(self):
        report = check_availability([], window(MONDAY, (10, 0), (11, 0)), [])
        assert report.participants == []
        assert report.can_schedule is True

    def test_intervals_of_other_participants_are_ignored(self):
        intervals = [busy("mallory", MONDAY, (10, 0), (11, 0))]

        report = check_availability(
            ["alice"], window(MONDAY, (10, 0), (11, 0)), intervals
        )

        assert report.participants[0].status == AvailabilityStatus.available

    def test_excluded_event_is_ignored(self):
        intervals = [
            busy("alice", MONDAY, (10, 0), (11, 0), event_id="evt-being-moved"),
        ]

        report = check_availability(
            ["alice"],
            window(MONDAY, (10, 0), (11, 0)),
            intervals,
            exclude_event_id="evt-being-moved",
        )

        assert report.can_schedule is True
        assert report.participants[0].conflicts == []

    def test_conflicts_are_sorted_by_start(self):
        intervals = [
            busy("alice", MONDAY, (11, 0), (12, 0), Priority.low),
            busy("alice", MONDAY, (9, 0), (10, 30), Priority.low),
        ]

        report = check_availability(
            ["alice"], window(MONDAY, (10, 0), (11, 30)), intervals
        )

        starts = [c.start for c in report.participants[0].conflicts]
        assert starts == sorted(starts)
        assert report.participants[0].conflict_count == 2

    def test_adding_high_priority_conflict_only_blocks(self):
        requested = window(MONDAY, (10, 0), (11, 0))
        intervals = [busy("alice", MONDAY, (10, 0), (10, 30), Priority.low)]

        before = check_availability(["alice", "bob"], requested, intervals)
        after = check_availability(
            ["alice", "bob"],
            requested,
            intervals + [busy("bob", MONDAY, (10, 30), (11, 30), Priority.high)],
        )

        assert before.can_schedule is True
        assert after.can_schedule is False

    def test_zero_length_window_is_rejected(self):
        instant = at(MONDAY, 10)
        with pytest.raises(InvalidWindow) as exc_info:
            check_availability(["alice"], TimeWindow(start=instant, end=instant), [])

        assert exc_info.value.component == "detector"
        assert exc_info.value.invariant == "start < end"
        assert exc_info.value.status_code == 422

    def test_reversed_busy_interval_is_rejected(self):
        reversed_interval = BusyInterval(
            participant_id="alice",
            start=at(MONDAY, 11),
            end=at(MONDAY, 10),
            priority=Priority.high,
        )
        with pytest.raises(InvalidWindow) as exc_info:
            check_availability(
                ["alice"], window(MONDAY, (9, 0), (12, 0)), [reversed_interval]
            )

        assert exc_info.value.field == "busy_intervals"

    def test_report_serializes_summary(self):
        intervals = [busy("alice", MONDAY, (10, 0), (11, 0), Priority.low)]
        report = check_availability(
            ["alice", "bob"], window(MONDAY, (10, 0), (11, 0)), intervals
        )

        payload = report.model_dump(mode="json")

        assert payload["summary"] == {
            "available": 1,
            "tentative": 1,
            "busy": 0,
            "total": 2,
        }
        assert payload["duration_minutes"] == 60
        assert payload["participants"][0]["conflict_count"] == 1


class TestConflictDensity(BaseSchedulingTest):
    def setup_method(self, method):
        super().setup_method(method)
        self.intervals = [
            busy("alice", MONDAY, (10, 0), (11, 0), Priority.low),
            busy("bob", MONDAY, (10, 30), (12, 0), Priority.high),
            busy("carol", MONDAY, (13, 0), (14, 0), Priority.medium),
            busy("outsider", MONDAY, (10, 0), (11, 0), Priority.urgent),
        ]
        self.density = ConflictDensityMap(self.intervals, ["alice", "bob", "carol"])

    def test_counts_simultaneously_busy_participants(self):
        assert self.density.count(window(MONDAY, (10, 30), (11, 0))) == 2
        assert self.density.count(window(MONDAY, (11, 0), (11, 30))) == 1
        assert self.density.count(window(MONDAY, (12, 0), (13, 0))) == 0
        assert len(self.density) == 3

    def test_blocks_only_on_high_priority(self):
        assert self.density.blocks(window(MONDAY, (11, 0), (11, 30))) is True
        assert self.density.blocks(window(MONDAY, (13, 0), (13, 30))) is False

    def test_matches_function_form(self):
        candidate = window(MONDAY, (10, 0), (13, 30))
        assert conflict_density(
            candidate, self.intervals, ["alice", "bob", "carol"]
        ) == self.density.count(candidate)

    def test_long_interval_starting_early_is_counted(self):
        density = ConflictDensityMap(
            [
                BusyInterval(
                    participant_id="alice",
                    start=at(MONDAY, 0),
                    end=at(MONDAY, 0) + timedelta(days=2),
                    priority=Priority.medium,
                )
            ]
        )
        assert density.count(window(TUESDAY, (10, 0), (11, 0))) == 1
