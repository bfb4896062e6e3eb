"""
Adapters layer - Sources of schedule data.
"""

from .schedule_file import FileScheduleProvider

__all__ = ["FileScheduleProvider"]
