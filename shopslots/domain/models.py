"""
Domain models for slot availability calculations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .clock import MINUTES_PER_DAY, to_12_hour, to_clock, to_minutes
from .exceptions import InvalidBusinessHoursError, InvalidIntervalError
from .weekday import Weekday


class UnavailableReason(str, Enum):
    """Why a slot cannot be booked, in the order constraints are checked."""

    OUTSIDE_WORKING_HOURS = "Outside staff working hours"
    BREAK = "Break overlap"
    BOOKED = "Booked"
    SHOP_CLOSED = "Shop closed"
    # Only reported by single-slot validation; generated slots never leave business hours
    OUTSIDE_BUSINESS_HOURS = "Outside business hours"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TimeInterval:
    """
    An immutable range of minutes since midnight.

    Invariant: 0 <= start < end <= 1440.
    """
    start: int
    end: int
    label: Optional[str] = None

    def __post_init__(self):
        if not 0 <= self.start < self.end <= MINUTES_PER_DAY:
            raise InvalidIntervalError(
                f"Interval must satisfy 0 <= start < end <= {MINUTES_PER_DAY}, "
                f"got {self.start}-{self.end}"
            )

    @classmethod
    def from_clock(cls, start_time: str, end_time: str, label: Optional[str] = None) -> "TimeInterval":
        """Build an interval from "HH:MM[:SS]" strings."""
        return cls(start=to_minutes(start_time), end=to_minutes(end_time), label=label)

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def overlaps(self, start: int, duration: int) -> bool:
        """
        Check whether a candidate ``[start, start + duration)`` collides with this interval.

        Three cases count as a collision: the candidate starts inside the
        interval, the candidate ends inside it (ending exactly at ``end``
        included), or the candidate swallows it whole. A candidate that
        starts exactly at ``end`` or ends exactly at ``start`` is clear.
        """
        finish = start + duration
        return (
            (self.start <= start < self.end)
            or (self.start < finish <= self.end)
            or (start <= self.start and finish >= self.end)
        )

    def contains(self, start: int, duration: int) -> bool:
        """Check whether a candidate fits entirely inside this interval."""
        return start >= self.start and start + duration <= self.end

    def __str__(self) -> str:
        return f"{to_clock(self.start)[:5]} - {to_clock(self.end)[:5]}"


@dataclass(frozen=True)
class DayScopedInterval(TimeInterval):
    """
    A working-hour window or break, optionally tied to one weekday.

    An interval without a day applies to every day.
    """
    day: Optional[Weekday] = None

    @classmethod
    def from_clock(
        cls,
        start_time: str,
        end_time: str,
        label: Optional[str] = None,
        day: "str | Weekday | None" = None,
    ) -> "DayScopedInterval":
        """Build a day-scoped interval from "HH:MM[:SS]" strings and a day name."""
        return cls(
            start=to_minutes(start_time),
            end=to_minutes(end_time),
            label=label,
            day=Weekday.parse(day) if day is not None else None,
        )

    def applies_to(self, day: Optional[Weekday]) -> bool:
        """Check whether the interval applies on ``day`` (``None`` means any day)."""
        return self.day is None or day is None or self.day == day

    def __str__(self) -> str:
        base = super().__str__()
        return f"{self.day.day_name} {base}" if self.day is not None else base


@dataclass(frozen=True)
class BusinessCalendar:
    """
    Business opening hours plus the slot grid and requested service length.

    All values are minutes; open/close are minutes since midnight.
    """
    open_time: int
    close_time: int
    slot_duration: int
    service_duration: int

    def __post_init__(self):
        if not 0 <= self.open_time < self.close_time <= MINUTES_PER_DAY:
            raise InvalidBusinessHoursError(
                f"Business close ({self.close_time}) must be later than open "
                f"({self.open_time}), both in minutes within one day"
            )
        if self.slot_duration <= 0:
            raise InvalidBusinessHoursError(
                f"Slot duration must be greater than zero, got {self.slot_duration}"
            )
        if self.service_duration <= 0:
            raise InvalidBusinessHoursError(
                f"Service duration must be greater than zero, got {self.service_duration}"
            )

    @classmethod
    def from_clock(
        cls,
        open_time: str,
        close_time: str,
        slot_duration: int,
        service_duration: int,
    ) -> "BusinessCalendar":
        """Build a calendar from "HH:MM[:SS]" open/close strings."""
        return cls(
            open_time=to_minutes(open_time),
            close_time=to_minutes(close_time),
            slot_duration=slot_duration,
            service_duration=service_duration,
        )

    def within_hours(self, start: int) -> bool:
        """Check the service starting at ``start`` fits between open and close."""
        return start >= self.open_time and start + self.service_duration <= self.close_time


@dataclass(frozen=True)
class Slot:
    """
    One step of the day's slot grid.

    Invariant: ``unavailable_reason`` is set iff ``available`` is False.
    """
    start_minutes: int
    end_minutes: int
    available: bool
    unavailable_reason: Optional[UnavailableReason] = None
    timezone: Optional[str] = None

    @property
    def start(self) -> str:
        return to_clock(self.start_minutes)

    @property
    def end(self) -> str:
        return to_clock(self.end_minutes)

    @property
    def display_start(self) -> str:
        return to_12_hour(self.start)

    @property
    def display_end(self) -> str:
        return to_12_hour(self.end)

    def to_dict(self) -> dict:
        """Plain representation for serialisation."""
        return {
            "start": self.start,
            "end": self.end,
            "available": self.available,
            "unavailable_reason": self.unavailable_reason.value if self.unavailable_reason else None,
            "display_start": self.display_start,
            "display_end": self.display_end,
            "timezone": self.timezone,
        }

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: h:mm AM – h:mm PM (reason)
        """
        text = f"{self.display_start} – {self.display_end}"
        if not self.available:
            text += f" ({self.unavailable_reason})"
        return text
