"""
Tests for schedule parsing and the weekday interval filter.
"""

import logging

from shopslots.domain.models import DayScopedInterval, TimeInterval
from shopslots.domain.schedule import DaySchedule, filter_for_day, parse_day_scoped, parse_intervals
from shopslots.domain.weekday import Weekday


class TestFilterForDay:
    """Tests for narrowing working hours and breaks to one weekday."""

    def test_keeps_matching_and_untagged_in_order(self):
        """Test matching and untagged intervals survive in input order."""
        intervals = [
            DayScopedInterval.from_clock("09:00", "12:00", day="Wednesday"),
            DayScopedInterval.from_clock("10:00", "18:00", day="Thursday"),
            DayScopedInterval.from_clock("12:00", "13:00"),
            DayScopedInterval.from_clock("13:00", "17:00", day="wednesday"),
        ]

        result = filter_for_day(intervals, Weekday.WEDNESDAY)

        assert result == (intervals[0], intervals[2], intervals[3])

    def test_no_day_keeps_everything(self):
        """Test every interval applies when no day is given."""
        intervals = [
            DayScopedInterval.from_clock("09:00", "12:00", day="Monday"),
            DayScopedInterval.from_clock("12:00", "13:00"),
        ]

        assert filter_for_day(intervals, None) == tuple(intervals)

    def test_does_not_mutate_input(self):
        """Test filtering leaves the input list untouched."""
        intervals = [
            DayScopedInterval.from_clock("09:00", "12:00", day="Monday"),
            DayScopedInterval.from_clock("09:00", "12:00", day="Tuesday"),
        ]
        original = list(intervals)

        filter_for_day(intervals, Weekday.MONDAY)

        assert intervals == original


class TestParsing:
    """Tests for converting raw schedule items."""

    def test_parse_working_hours(self):
        """Test raw working hours and breaks become intervals."""
        result = parse_day_scoped([
            {"day_of_week": "Wednesday", "start_time": "09:00", "end_time": "17:00"},
            {"start_time": "12:00:00", "end_time": "13:00:00", "name": "Lunch Break"},
        ])

        assert result == (
            DayScopedInterval(start=540, end=1020, day=Weekday.WEDNESDAY),
            DayScopedInterval(start=720, end=780, label="Lunch Break"),
        )

    def test_parse_appointments_use_time_key(self):
        """Test appointments read their start from the time key."""
        result = parse_intervals([{"time": "09:30", "end_time": "10:00"}], "appointment")

        assert result == (TimeInterval(start=570, end=600),)

    def test_parse_closure_reason_as_label(self):
        """Test the closure reason becomes the label."""
        result = parse_intervals([{"start_time": "14:00", "end_time": "15:00", "reason": "Maintenance"}])

        assert result[0].label == "Maintenance"

    def test_malformed_items_are_skipped(self, caplog):
        """A single bad item is logged and skipped, the rest survive."""
        with caplog.at_level(logging.WARNING, logger="shopslots.domain.schedule"):
            result = parse_day_scoped([
                {"start_time": "12:00"},
                {"start_time": "", "end_time": "13:00"},
                {"start_time": "lunch", "end_time": "13:00"},
                {"start_time": "13:00", "end_time": "12:00"},
                {"start_time": "12:00", "end_time": "13:00", "day_of_week": "Funday"},
                "12:00-13:00",
                {"start_time": "15:30", "end_time": "16:00"},
            ], "break")

        assert result == (DayScopedInterval(start=930, end=960),)
        assert len(caplog.records) == 6

    def test_model_instances_pass_through(self):
        """Test already-built intervals are kept as they are."""
        appointment = TimeInterval(start=600, end=630)
        window = DayScopedInterval(start=540, end=600, day=Weekday.MONDAY)

        assert parse_intervals([appointment]) == (appointment,)
        assert parse_day_scoped([window]) == (window,)

    def test_none_is_empty(self):
        """Test missing collections parse as empty."""
        assert parse_intervals(None) == ()
        assert parse_day_scoped(None) == ()


class TestDaySchedule:
    """Tests for DaySchedule."""

    def test_from_raw_and_for_day(self):
        """Test building a schedule and narrowing it to one day."""
        schedule = DaySchedule.from_raw(
            working_hours=[
                {"day_of_week": "Wednesday", "start_time": "09:00", "end_time": "17:00"},
                {"day_of_week": "Thursday", "start_time": "10:00", "end_time": "18:00"},
            ],
            breaks=[{"day_of_week": "Thursday", "start_time": "12:00", "end_time": "13:00"}],
            appointments=[{"time": "09:30", "end_time": "10:00"}],
            closures=[{"start_time": "14:00", "end_time": "15:00"}],
        )

        wednesday = schedule.for_day(Weekday.WEDNESDAY)

        assert [str(window) for window in wednesday.working_hours] == ["wednesday 09:00 - 17:00"]
        assert wednesday.breaks == ()
        assert wednesday.appointments == schedule.appointments
        assert wednesday.closures == schedule.closures
        assert len(schedule.working_hours) == 2

    def test_for_no_day_returns_same_schedule(self):
        """Test narrowing to no day returns the schedule unchanged."""
        schedule = DaySchedule.from_raw(working_hours=[{"start_time": "09:00", "end_time": "17:00"}])

        assert schedule.for_day(None) is schedule
