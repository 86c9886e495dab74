"""
Domain-specific exception hierarchy for the slot calendar.
"""


class SlotCalendarError(Exception):
    """Base class for all application-level errors."""


class ValidationError(SlotCalendarError):
    """Raised when an interval or calendar option is invalid or missing."""


class DataSourceError(SlotCalendarError):
    """Raised when schedule data cannot be fetched or parsed."""


class InvariantViolation(SlotCalendarError):
    """Raised when resolved schedule data breaks a structural invariant."""
