"""
Tests for wall-clock arithmetic.
"""

import pytest

from shopslots.domain.clock import convert_time, standardize_time, to_12_hour, to_clock, to_minutes
from shopslots.domain.exceptions import InvalidDateError, InvalidTimeError, InvalidTimezoneError


class TestToMinutes:
    """Tests for parsing clock strings."""

    def test_hours_and_minutes(self):
        """Test hours and minutes convert to minutes since midnight."""
        assert to_minutes("00:00") == 0
        assert to_minutes("09:30") == 570
        assert to_minutes("23:59") == 1439

    def test_seconds_are_ignored(self):
        """Test seconds do not change the result."""
        assert to_minutes("09:30:45") == 570

    def test_single_digit_hour(self):
        """Test an hour without a leading zero."""
        assert to_minutes("9:05") == 545

    def test_end_of_day_marker(self):
        """Test 24:00 parses as the end of the day."""
        assert to_minutes("24:00") == 1440

    @pytest.mark.parametrize("value", ["", None, "noon", "12", "12:5", "25:00", "12:60", "24:30", "12:00:61"])
    def test_malformed_input_raises(self, value):
        """Malformed input is rejected instead of silently becoming zero."""
        with pytest.raises(InvalidTimeError):
            to_minutes(value)


class TestFormatting:
    """Tests for rendering minutes and 12-hour display."""

    def test_to_clock_pads_and_adds_seconds(self):
        """Test minutes render as zero-padded HH:MM:SS."""
        assert to_clock(0) == "00:00:00"
        assert to_clock(545) == "09:05:00"
        assert to_clock(1020) == "17:00:00"

    def test_to_clock_out_of_range(self):
        """Test minutes outside the day are rejected."""
        with pytest.raises(InvalidTimeError):
            to_clock(-1)
        with pytest.raises(InvalidTimeError):
            to_clock(1441)

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("00:00", "12:00 AM"),
            ("00:30:00", "12:30 AM"),
            ("09:05", "9:05 AM"),
            ("12:00", "12:00 PM"),
            ("13:45", "1:45 PM"),
            ("23:59", "11:59 PM"),
        ],
    )
    def test_to_12_hour(self, value, expected):
        """Test 12-hour display, including midnight and noon."""
        assert to_12_hour(value) == expected

    def test_standardize_time(self):
        """Test HH:MM is normalised to HH:MM:SS."""
        assert standardize_time("09:00") == "09:00:00"
        assert standardize_time("9:00:15") == "09:00:15"
        assert standardize_time("") is None
        assert standardize_time(None) is None


class TestConvertTime:
    """Tests for converting wall-clock times between zones."""

    def test_summer_offset(self):
        """Test conversion during daylight saving time."""
        # Edmonton is UTC-6 during daylight saving time
        assert convert_time("10:00", "2024-07-10", "America/Edmonton", "UTC") == "16:00:00"

    def test_winter_offset(self):
        """Test conversion during standard time."""
        assert convert_time("10:00", "2024-01-10", "America/Edmonton", "UTC") == "17:00:00"

    def test_same_zone_is_identity(self):
        """Test converting within one zone keeps the time."""
        assert convert_time("08:15:30", "2024-07-10", "Europe/Berlin", "Europe/Berlin") == "08:15:30"

    def test_crossing_midnight(self):
        """Test a conversion that lands on the next day."""
        assert convert_time("23:30", "2024-07-10", "UTC", "Asia/Tokyo") == "08:30:00"

    def test_invalid_zone(self):
        """Test an unknown zone is rejected."""
        with pytest.raises(InvalidTimezoneError):
            convert_time("10:00", "2024-07-10", "Mars/Olympus", "UTC")

    def test_invalid_date(self):
        """Test an invalid date is rejected."""
        with pytest.raises(InvalidDateError):
            convert_time("10:00", "2024-13-40", "UTC", "UTC")
