"""Typed errors raised by the scheduling engine.

Engine functions raise these to their immediate caller; routers translate
them into HTTP responses.
"""


class SchedulingError(ValueError):
    """Base exception for scheduling engine errors."""

    pass


class InvalidScheduleParameters(SchedulingError):
    """Malformed slot-generation bounds or date range."""

    pass


class OutOfRangeDuration(SchedulingError):
    """End-time computation would cross the day boundary."""

    pass


class InvariantViolation(SchedulingError):
    """Negative or otherwise impossible count, duration or amount."""

    pass


class InvalidTimeFormat(SchedulingError):
    """Time string is not a valid HH:MM value."""

    pass


class InvalidStatusTransition(SchedulingError):
    """Appointment status change not allowed by the lifecycle."""

    pass
