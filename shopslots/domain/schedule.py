"""
Schedule data for one staff member on one day, and the weekday filter over it.

Raw schedule items arrive as mappings from whatever store the caller uses.
A single malformed item is logged and skipped so it cannot take the whole
day's slot list down with it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple, TypeVar

from .exceptions import InvalidInputError
from .models import DayScopedInterval, TimeInterval
from .weekday import Weekday

logger = logging.getLogger(__name__)

IntervalT = TypeVar("IntervalT", bound=TimeInterval)

_START_KEYS = ("start_time", "time", "start")
_END_KEYS = ("end_time", "end")
_LABEL_KEYS = ("name", "reason", "label")


def _first_present(item: Mapping[str, Any], keys: Tuple[str, ...]) -> Optional[Any]:
    for key in keys:
        value = item.get(key)
        if value:
            return value
    return None


def parse_intervals(items: Optional[Iterable[Any]], kind: str = "interval") -> Tuple[TimeInterval, ...]:
    """
    Convert raw appointment or closure items into TimeIntervals.

    Appointments use ``time``/``end_time``; closures use
    ``start_time``/``end_time`` with an optional ``reason``. Items that
    are already TimeIntervals pass through unchanged.
    """
    parsed = []
    for item in items or ():
        if isinstance(item, TimeInterval):
            parsed.append(item)
            continue
        interval = _parse_item(item, kind, day_scoped=False)
        if interval is not None:
            parsed.append(interval)
    return tuple(parsed)


def parse_day_scoped(items: Optional[Iterable[Any]], kind: str = "interval") -> Tuple[DayScopedInterval, ...]:
    """
    Convert raw working-hour or break items into DayScopedIntervals.

    Each item needs ``start_time`` and ``end_time`` and may carry a
    ``day_of_week`` name and a ``name`` label.
    """
    parsed = []
    for item in items or ():
        if isinstance(item, DayScopedInterval):
            parsed.append(item)
            continue
        if isinstance(item, TimeInterval):
            parsed.append(DayScopedInterval(start=item.start, end=item.end, label=item.label))
            continue
        interval = _parse_item(item, kind, day_scoped=True)
        if interval is not None:
            parsed.append(interval)
    return tuple(parsed)


def _parse_item(item: Any, kind: str, day_scoped: bool) -> Optional[TimeInterval]:
    if not isinstance(item, Mapping):
        logger.warning("Skipping %s: expected a mapping, got %r", kind, item)
        return None

    start_time = _first_present(item, _START_KEYS)
    end_time = _first_present(item, _END_KEYS)
    if not start_time or not end_time:
        logger.warning("Skipping %s without start and end time: %r", kind, dict(item))
        return None

    label = _first_present(item, _LABEL_KEYS)
    try:
        if day_scoped:
            return DayScopedInterval.from_clock(
                start_time,
                end_time,
                label=label,
                day=item.get("day_of_week"),
            )
        return TimeInterval.from_clock(start_time, end_time, label=label)
    except InvalidInputError as exc:
        logger.warning("Skipping invalid %s %r: %s", kind, dict(item), exc)
        return None


def filter_for_day(
    intervals: Iterable[DayScopedInterval],
    day: Optional[Weekday],
) -> Tuple[DayScopedInterval, ...]:
    """
    Keep the intervals that apply on ``day``, preserving input order.

    Untagged intervals always apply; with ``day=None`` everything applies.
    """
    return tuple(interval for interval in intervals if interval.applies_to(day))


@dataclass(frozen=True)
class DaySchedule:
    """
    Everything that constrains one staff member's bookable time on a day.

    ``working_hours`` empty means the staff member is unconstrained.
    """
    working_hours: Tuple[DayScopedInterval, ...] = ()
    breaks: Tuple[DayScopedInterval, ...] = ()
    appointments: Tuple[TimeInterval, ...] = ()
    closures: Tuple[TimeInterval, ...] = ()

    @classmethod
    def from_raw(
        cls,
        working_hours: Optional[Iterable[Any]] = None,
        breaks: Optional[Iterable[Any]] = None,
        appointments: Optional[Iterable[Any]] = None,
        closures: Optional[Iterable[Any]] = None,
    ) -> "DaySchedule":
        """Build a schedule from raw items, skipping malformed ones."""
        return cls(
            working_hours=parse_day_scoped(working_hours, "working hours"),
            breaks=parse_day_scoped(breaks, "break"),
            appointments=parse_intervals(appointments, "appointment"),
            closures=parse_intervals(closures, "closure"),
        )

    def for_day(self, day: Optional[Weekday]) -> "DaySchedule":
        """Return a copy narrowed to the working hours and breaks of ``day``."""
        if day is None:
            return self
        return DaySchedule(
            working_hours=filter_for_day(self.working_hours, day),
            breaks=filter_for_day(self.breaks, day),
            appointments=self.appointments,
            closures=self.closures,
        )
