"""
Domain-specific exception hierarchy for the slot availability engine.
"""


class ShopSlotsError(Exception):
    """Base class for all application-level errors."""


class InvalidInputError(ShopSlotsError, ValueError):
    """Raised when caller-supplied data cannot be used by the engine."""


class InvalidTimeError(InvalidInputError):
    """Raised when a wall-clock string is empty or malformed."""


class InvalidDateError(InvalidInputError):
    """Raised when a calendar date cannot be parsed."""


class InvalidTimezoneError(InvalidInputError):
    """Raised when an IANA time zone name is unknown."""


class InvalidIntervalError(InvalidInputError):
    """Raised when an interval does not satisfy 0 <= start < end <= 1440."""


class InvalidBusinessHoursError(InvalidInputError):
    """Raised for degenerate business hours, granularity or service duration."""


class InvalidScheduleError(InvalidInputError):
    """Raised when a schedule item (day name, label, shape) is invalid."""


class ScheduleSourceError(ShopSlotsError):
    """Raised when schedule data cannot be read from its source."""
