"""
Core business logic for calculating bookable appointment slots.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Any, Iterable, List, Optional

from .clock import to_minutes
from .models import BusinessCalendar, Slot, UnavailableReason
from .schedule import DaySchedule
from .weekday import Weekday, resolve_weekday

logger = logging.getLogger(__name__)


class SlotCalculator:
    """
    Calculates the slot grid for a day and validates single candidates.

    Algorithm:
    1. Resolve the weekday of the requested date in the business time zone
    2. Narrow working hours and breaks to that weekday
    3. Walk the business day in slot-duration steps
    4. For each start, record the first failing constraint in the order
       working hours -> breaks -> appointments -> closures

    Generation and single-slot validation share ``_first_conflict`` so
    they cannot disagree about the same start time.
    """

    def __init__(self, calendar: BusinessCalendar):
        self.calendar = calendar

    def generate_slots(
        self,
        schedule: DaySchedule,
        date: "str | date_type | None" = None,
        timezone: Optional[str] = None,
    ) -> List[Slot]:
        """
        Generate every slot of the business day, available or not.

        Args:
            schedule: Working hours, breaks, appointments and closures
            date: Day being booked; without it every day-tagged interval applies
            timezone: IANA zone used to resolve the weekday (UTC when omitted)

        Returns:
            Slots ordered by start time, one per grid step
        """
        day_schedule = schedule.for_day(self._resolve_day(date, timezone))
        calendar = self.calendar
        last_start = calendar.close_time - calendar.service_duration

        slots: List[Slot] = []
        for start in range(calendar.open_time, last_start + 1, calendar.slot_duration):
            reason = self._first_conflict(start, day_schedule)
            slots.append(
                Slot(
                    start_minutes=start,
                    end_minutes=start + calendar.service_duration,
                    available=reason is None,
                    unavailable_reason=reason,
                    timezone=timezone,
                )
            )

        logger.debug(
            "Generated %d slots (%d available) for %s",
            len(slots),
            sum(1 for slot in slots if slot.available),
            date or "any day",
        )
        return slots

    def check_slot(
        self,
        start: int,
        schedule: DaySchedule,
        date: "str | date_type | None" = None,
        timezone: Optional[str] = None,
    ) -> Optional[UnavailableReason]:
        """
        Validate a single start time without generating the whole day.

        Returns:
            The reason the slot is unavailable, or None if it can be booked
        """
        if not self.calendar.within_hours(start):
            return UnavailableReason.OUTSIDE_BUSINESS_HOURS
        day_schedule = schedule.for_day(self._resolve_day(date, timezone))
        return self._first_conflict(start, day_schedule)

    def is_slot_available(
        self,
        start: int,
        schedule: DaySchedule,
        date: "str | date_type | None" = None,
        timezone: Optional[str] = None,
    ) -> bool:
        """Check whether a service starting at ``start`` can be booked."""
        return self.check_slot(start, schedule, date=date, timezone=timezone) is None

    def _first_conflict(self, start: int, schedule: DaySchedule) -> Optional[UnavailableReason]:
        duration = self.calendar.service_duration

        if schedule.working_hours and not any(
            window.contains(start, duration) for window in schedule.working_hours
        ):
            return UnavailableReason.OUTSIDE_WORKING_HOURS
        if any(pause.overlaps(start, duration) for pause in schedule.breaks):
            return UnavailableReason.BREAK
        if any(booked.overlaps(start, duration) for booked in schedule.appointments):
            return UnavailableReason.BOOKED
        if any(closure.overlaps(start, duration) for closure in schedule.closures):
            return UnavailableReason.SHOP_CLOSED
        return None

    @staticmethod
    def _resolve_day(date, timezone: Optional[str]) -> Optional[Weekday]:
        if date is None:
            return None
        return resolve_weekday(date, timezone or "UTC")


@dataclass
class SlotSummary:
    """Counts and the first few bookable ranges of a generated day."""
    total: int
    available: int
    first_available: List[str] = field(default_factory=list)


def summarize_slots(slots: Iterable[Slot], limit: int = 5) -> SlotSummary:
    """Summarise a slot list: totals and the first ``limit`` available ranges."""
    slot_list = list(slots)
    open_slots = [slot for slot in slot_list if slot.available]
    return SlotSummary(
        total=len(slot_list),
        available=len(open_slots),
        first_available=[f"{slot.start}-{slot.end}" for slot in open_slots[:limit]],
    )


def generate_slots(
    business_open: str,
    business_close: str,
    slot_duration: int,
    service_duration: int,
    working_hours: Optional[Iterable[Any]] = None,
    breaks: Optional[Iterable[Any]] = None,
    booked_appointments: Optional[Iterable[Any]] = None,
    closures: Optional[Iterable[Any]] = None,
    date: "str | date_type | None" = None,
    timezone: Optional[str] = None,
) -> List[Slot]:
    """
    Generate the slot grid for a day from clock strings and raw schedule items.

    Raises:
        InvalidTimeError: If business open/close are malformed
        InvalidBusinessHoursError: If the hours or durations are degenerate
    """
    calendar = BusinessCalendar.from_clock(
        business_open, business_close, slot_duration, service_duration
    )
    schedule = DaySchedule.from_raw(working_hours, breaks, booked_appointments, closures)
    return SlotCalculator(calendar).generate_slots(schedule, date=date, timezone=timezone)


def is_slot_available(
    candidate_start: str,
    service_duration: int,
    business_open: str,
    business_close: str,
    working_hours: Optional[Iterable[Any]] = None,
    breaks: Optional[Iterable[Any]] = None,
    booked_appointments: Optional[Iterable[Any]] = None,
    closures: Optional[Iterable[Any]] = None,
    date: "str | date_type | None" = None,
    timezone: Optional[str] = None,
) -> bool:
    """
    Check one candidate start time, e.g. when rescheduling.

    Raises:
        InvalidTimeError: If the candidate or business times are malformed
        InvalidBusinessHoursError: If the hours or duration are degenerate
    """
    # The grid step plays no part in validating a single start
    calendar = BusinessCalendar.from_clock(
        business_open, business_close, service_duration, service_duration
    )
    schedule = DaySchedule.from_raw(working_hours, breaks, booked_appointments, closures)
    return SlotCalculator(calendar).is_slot_available(
        to_minutes(candidate_start), schedule, date=date, timezone=timezone
    )
