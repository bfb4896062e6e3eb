"""
Calendar day resolution in a business time zone.
"""

from __future__ import annotations

import logging
import re
from datetime import date as date_type
from enum import IntEnum

import pendulum
from pendulum.tz.timezone import Timezone

from .exceptions import InvalidDateError, InvalidScheduleError, InvalidTimezoneError

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class Weekday(IntEnum):
    """Day of week, numbered 0=Sunday … 6=Saturday."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def day_name(self) -> str:
        """Lowercase English name, e.g. ``"wednesday"``."""
        return self.name.lower()

    @classmethod
    def parse(cls, value: "str | Weekday") -> "Weekday":
        """
        Parse an English weekday name, ignoring case and surrounding whitespace.

        Raises:
            InvalidScheduleError: If the name is not a weekday
        """
        if isinstance(value, Weekday):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise InvalidScheduleError(f"Unknown day of week: {value!r}") from None

    @classmethod
    def from_date(cls, day: date_type) -> "Weekday":
        """Weekday of a plain calendar date."""
        return cls(day.isoweekday() % 7)


def get_timezone(name: str) -> Timezone:
    """
    Look up an IANA time zone.

    Raises:
        InvalidTimezoneError: If the name is empty or unknown
    """
    if not name:
        raise InvalidTimezoneError("Time zone name must not be empty")
    try:
        return pendulum.timezone(name)
    except (ValueError, KeyError) as exc:
        raise InvalidTimezoneError(f"Unknown time zone: {name!r}") from exc


def parse_date(value: "str | date_type") -> date_type:
    """
    Parse an ISO ``YYYY-MM-DD`` date. ``date`` instances are returned as-is.

    Raises:
        InvalidDateError: If the string is not a valid calendar date
    """
    if isinstance(value, date_type):
        return value
    text = str(value).strip()
    if not _ISO_DATE.match(text):
        raise InvalidDateError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    try:
        return pendulum.from_format(text, "YYYY-MM-DD").date()
    except ValueError as exc:
        raise InvalidDateError(f"Invalid date {value!r}, expected YYYY-MM-DD") from exc


def resolve_weekday(on_date: "str | date_type", timezone: str = "UTC") -> Weekday:
    """
    Determine the civil weekday of a calendar date in a time zone.

    The date is anchored at 12:00 UTC before converting into the zone, so
    offsets from -12h up to +11:59 keep the same civil date. A midnight
    anchor would slip to the previous day for every negative offset.
    Zones at +12h and beyond resolve to the following day.

    Args:
        on_date: Calendar date (``YYYY-MM-DD`` or ``date``)
        timezone: IANA time zone name

    Returns:
        The resolved Weekday
    """
    day = parse_date(on_date)
    zone = get_timezone(timezone)

    noon_utc = pendulum.datetime(day.year, day.month, day.day, 12, tz="UTC")
    local = noon_utc.in_timezone(zone)
    weekday = Weekday.from_date(local.date())

    logger.debug("Resolved %s in %s to %s", day.isoformat(), timezone, weekday.day_name)
    return weekday
