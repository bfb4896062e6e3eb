"""
shopslots - slot availability engine for booking shop appointments.
"""

from .domain import generate_slots, is_slot_available

__version__ = "0.1.0"

__all__ = ["__version__", "generate_slots", "is_slot_available"]
