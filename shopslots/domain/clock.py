"""
Wall-clock arithmetic.

Every comparison in the engine happens on integer minutes since midnight.
Strings in "HH:MM" or "HH:MM:SS" form only exist at the edges: parsing caller
input and rendering slots back out.
"""

from __future__ import annotations

import re
from datetime import date as date_type
from typing import Optional, Tuple

import pendulum

from .exceptions import InvalidTimeError
from .weekday import get_timezone, parse_date

MINUTES_PER_DAY = 24 * 60

_CLOCK_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")


def _split_clock(value: Optional[str]) -> Tuple[int, int, int]:
    """Split a clock string into (hours, minutes, seconds), validating ranges."""
    if not value or not isinstance(value, str):
        raise InvalidTimeError(f"Time must be a non-empty 'HH:MM' string, got {value!r}")

    match = _CLOCK_PATTERN.match(value)
    if match is None:
        raise InvalidTimeError(f"Malformed time {value!r}, expected 'HH:MM' or 'HH:MM:SS'")

    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)

    if minutes > 59 or seconds > 59:
        raise InvalidTimeError(f"Minutes and seconds must be between 0 and 59, got {value!r}")
    # 24:00 is accepted as the end-of-day marker only
    if hours > 24 or (hours == 24 and (minutes or seconds)):
        raise InvalidTimeError(f"Hour must be between 0 and 23, got {value!r}")

    return hours, minutes, seconds


def to_minutes(value: Optional[str]) -> int:
    """
    Convert "HH:MM" or "HH:MM:SS" to minutes since midnight.

    Seconds are accepted but ignored.

    Raises:
        InvalidTimeError: If the value is empty or malformed
    """
    hours, minutes, _ = _split_clock(value)
    return hours * 60 + minutes


def to_clock(minutes: int) -> str:
    """Convert minutes since midnight to a zero-padded "HH:MM:SS" string."""
    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise InvalidTimeError(f"Minutes must be between 0 and {MINUTES_PER_DAY}, got {minutes}")
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}:00"


def to_12_hour(value: str) -> str:
    """
    Format a 24-hour clock string as "h:mm AM/PM".

    Hour 0 and hour 12 both display as 12. Display only, never compare on it.
    """
    hours, minutes, _ = _split_clock(value)
    period = "PM" if 12 <= hours < 24 else "AM"
    hour12 = hours % 12 or 12
    return f"{hour12}:{minutes:02d} {period}"


def standardize_time(value: Optional[str]) -> Optional[str]:
    """Normalise "HH:MM" to "HH:MM:SS". Empty input yields None."""
    if not value:
        return None
    hours, minutes, seconds = _split_clock(value)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def convert_time(
    value: str,
    on_date: str | date_type,
    source_timezone: str,
    target_timezone: str,
) -> str:
    """
    Convert a wall-clock time on a given date from one time zone to another.

    Args:
        value: Time in "HH:MM" or "HH:MM:SS" form, local to ``source_timezone``
        on_date: Calendar date the time belongs to (``YYYY-MM-DD``)
        source_timezone: IANA name the time is expressed in
        target_timezone: IANA name to express the time in

    Returns:
        The same instant as "HH:MM:SS" in the target zone
    """
    hours, minutes, seconds = _split_clock(value)
    if hours == 24:
        raise InvalidTimeError("24:00 cannot be converted between time zones")

    day = parse_date(on_date)
    moment = pendulum.datetime(
        day.year,
        day.month,
        day.day,
        hours,
        minutes,
        seconds,
        tz=get_timezone(source_timezone),
    )
    return moment.in_timezone(get_timezone(target_timezone)).format("HH:mm:ss")
