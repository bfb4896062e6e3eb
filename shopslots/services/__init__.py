"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking_slots import BookingSlotService, ScheduleProviderProtocol

__all__ = ["BookingSlotService", "ScheduleProviderProtocol"]
