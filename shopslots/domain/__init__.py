"""
Domain layer - Pure business logic without external dependencies.
"""

from .models import BusinessCalendar, DayScopedInterval, Slot, TimeInterval, UnavailableReason
from .schedule import DaySchedule, filter_for_day
from .slot_calculator import SlotCalculator, generate_slots, is_slot_available, summarize_slots
from .weekday import Weekday, resolve_weekday

__all__ = [
    "BusinessCalendar",
    "DayScopedInterval",
    "DaySchedule",
    "Slot",
    "SlotCalculator",
    "TimeInterval",
    "UnavailableReason",
    "Weekday",
    "filter_for_day",
    "generate_slots",
    "is_slot_available",
    "resolve_weekday",
    "summarize_slots",
]
