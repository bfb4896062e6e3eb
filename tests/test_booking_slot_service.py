"""
Tests for the BookingSlotService orchestration layer.
"""

import asyncio
from typing import Dict, List

from shopslots.config import BusinessConfig
from shopslots.domain.models import UnavailableReason
from shopslots.domain.schedule import DaySchedule
from shopslots.services.booking_slots import BookingSlotService


class StubScheduleProvider:
    """Minimal stub matching ScheduleProviderProtocol."""

    def __init__(self, schedules: Dict[str, DaySchedule]):
        self._schedules = schedules
        self.calls: List[Dict[str, str]] = []

    async def get_schedule(self, staff_id, on_date):
        self.calls.append({"staff_id": staff_id, "on_date": str(on_date)})
        return self._schedules[staff_id]


def _build_service(provider: StubScheduleProvider, timezone: str = "America/Edmonton") -> BookingSlotService:
    business = BusinessConfig(open_time="09:00", close_time="17:00", slot_duration=30, service_duration=30)
    return BookingSlotService(schedule_provider=provider, business=business, timezone=timezone)


def _alex_schedule() -> DaySchedule:
    return DaySchedule.from_raw(
        working_hours=[{"day_of_week": "Wednesday", "start_time": "09:00", "end_time": "17:00"}],
        breaks=[{"start_time": "12:00", "end_time": "13:00", "name": "Lunch Break"}],
        appointments=[{"time": "09:30", "end_time": "10:00"}],
    )


def test_find_slots_uses_provider_and_calculator():
    """End-to-end call should yield the day's slot grid."""
    provider = StubScheduleProvider({"alex": _alex_schedule()})
    service = _build_service(provider)

    slots = asyncio.run(service.find_slots(staff_id="alex", on_date="2024-07-10"))

    assert provider.calls == [{"staff_id": "alex", "on_date": "2024-07-10"}]
    assert len(slots) == 16
    assert slots[1].unavailable_reason is UnavailableReason.BOOKED
    assert all(slot.timezone == "America/Edmonton" for slot in slots)


def test_find_slots_available_only_with_custom_service_length():
    """A custom service length overrides the configured default."""
    service = _build_service(StubScheduleProvider({"alex": _alex_schedule()}))

    slots = asyncio.run(
        service.find_slots(
            staff_id="alex",
            on_date="2024-07-10",
            service_duration=60,
            available_only=True,
        )
    )

    starts = [slot.start[:5] for slot in slots]
    assert all(slot.available for slot in slots)
    assert all(slot.end_minutes - slot.start_minutes == 60 for slot in slots)
    assert "09:00" not in starts  # runs into the 09:30 appointment
    assert "11:30" not in starts  # runs into lunch
    assert starts[0] == "10:00"
    assert starts[-1] == "16:00"


def test_check_reschedule_reports_reason():
    """Rescheduling reports the first failing constraint."""
    service = _build_service(StubScheduleProvider({"alex": _alex_schedule()}))

    def check(time):
        return asyncio.run(service.check_reschedule(staff_id="alex", on_date="2024-07-10", start_time=time))

    assert check("10:00") is None
    assert check("12:15") is UnavailableReason.BREAK
    assert check("09:45") is UnavailableReason.BOOKED
    assert check("16:45") is UnavailableReason.OUTSIDE_BUSINESS_HOURS


def test_is_slot_available_respects_weekday():
    """Wednesday-only hours do not constrain a Thursday booking."""
    schedule = DaySchedule.from_raw(
        working_hours=[{"day_of_week": "Wednesday", "start_time": "13:00", "end_time": "17:00"}],
    )
    service = _build_service(StubScheduleProvider({"sam": schedule}))

    on_wednesday = asyncio.run(service.is_slot_available(staff_id="sam", on_date="2024-07-10", start_time="09:00"))
    on_thursday = asyncio.run(service.is_slot_available(staff_id="sam", on_date="2024-07-11", start_time="09:00"))

    assert on_wednesday is False
    assert on_thursday is True
