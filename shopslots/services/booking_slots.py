"""
Application services for offering and validating booking slots.

The service fetches a staff member's day schedule via a provider adapter
and delegates the availability calculation to the domain-level
``SlotCalculator``. The provider is a protocol so the file-backed adapter
or an in-memory stub can be plugged in.
"""

from __future__ import annotations

from datetime import date as date_type
from typing import List, Optional, Protocol

from ..config import BusinessConfig
from ..domain.clock import to_minutes
from ..domain.models import Slot, UnavailableReason
from ..domain.schedule import DaySchedule
from ..domain.slot_calculator import SlotCalculator


class ScheduleProviderProtocol(Protocol):
    """Protocol describing the schedule source needed by the service."""

    async def get_schedule(self, staff_id: str, on_date: "str | date_type") -> DaySchedule:
        """Return working hours, breaks, appointments and closures for a day."""


class BookingSlotService:
    """
    Orchestrates schedule retrieval and slot calculation for one business.

    The business time zone is held here and passed into every calculation.
    """

    def __init__(
        self,
        schedule_provider: ScheduleProviderProtocol,
        business: BusinessConfig,
        timezone: str,
    ) -> None:
        self._schedule_provider = schedule_provider
        self._business = business
        self._timezone = timezone

    @property
    def timezone(self) -> str:
        return self._timezone

    async def find_slots(
        self,
        *,
        staff_id: str,
        on_date: "str | date_type",
        service_duration: Optional[int] = None,
        available_only: bool = False,
    ) -> List[Slot]:
        """
        Generate the slot grid for a staff member on a date.
        """
        schedule = await self._schedule_provider.get_schedule(staff_id, on_date)
        slots = self._calculator(service_duration).generate_slots(
            schedule,
            date=on_date,
            timezone=self._timezone,
        )
        if available_only:
            return [slot for slot in slots if slot.available]
        return slots

    async def check_reschedule(
        self,
        *,
        staff_id: str,
        on_date: "str | date_type",
        start_time: str,
        service_duration: Optional[int] = None,
    ) -> Optional[UnavailableReason]:
        """
        Validate a single proposed start time.

        Returns:
            None if the slot can be booked, otherwise the first failing reason
        """
        start = to_minutes(start_time)
        schedule = await self._schedule_provider.get_schedule(staff_id, on_date)
        return self._calculator(service_duration).check_slot(
            start,
            schedule,
            date=on_date,
            timezone=self._timezone,
        )

    async def is_slot_available(
        self,
        *,
        staff_id: str,
        on_date: "str | date_type",
        start_time: str,
        service_duration: Optional[int] = None,
    ) -> bool:
        """Boolean form of ``check_reschedule``."""
        reason = await self.check_reschedule(
            staff_id=staff_id,
            on_date=on_date,
            start_time=start_time,
            service_duration=service_duration,
        )
        return reason is None

    def _calculator(self, service_duration: Optional[int]) -> SlotCalculator:
        return SlotCalculator(self._business.to_calendar(service_duration))
