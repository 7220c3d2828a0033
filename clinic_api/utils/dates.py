"""Date and time helpers for appointment display and scheduling.

Appointments store a calendar date and a local start time with minute
resolution. Nothing here reads the clock: callers pass the reference date
explicitly.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time

from clinic_api.core.constants import MINUTES_PER_DAY
from clinic_api.core.errors import InvalidTimeFormat, InvariantViolation, OutOfRangeDuration

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: str | time) -> time:
    """Parse an "HH:MM" string (24-hour clock) into a time."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    match = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidTimeFormat(f"Expected HH:MM, got {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormat(f"Time out of range: {value!r}")
    return time(hours, minutes)


def format_time_label(value: time) -> str:
    """Format a time as "HH:MM"."""
    return f"{value.hour:02d}:{value.minute:02d}"


def minutes_since_midnight(value: time) -> int:
    return value.hour * 60 + value.minute


def time_from_minutes(minutes: int) -> time:
    """Inverse of minutes_since_midnight for 0 <= minutes < 24h."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise OutOfRangeDuration(f"{minutes} minutes is outside a single day")
    return time(minutes // 60, minutes % 60)


def calculate_end_time(start: str | time, duration_minutes: int) -> time:
    """
    Calculate an appointment's end time within the same day.

    Args:
        start: Start time (time or "HH:MM")
        duration_minutes: Appointment length, must be positive

    Returns:
        End time

    Raises:
        InvariantViolation: duration is zero or negative
        OutOfRangeDuration: the end would fall past 23:59 (midnight included);
            the result never wraps into the next day
    """
    start_time = parse_time(start)
    if duration_minutes <= 0:
        raise InvariantViolation(f"Duration must be positive, got {duration_minutes}")

    end_minutes = minutes_since_midnight(start_time) + duration_minutes
    if end_minutes >= MINUTES_PER_DAY:
        raise OutOfRangeDuration(
            f"{format_time_label(start_time)} + {duration_minutes} min crosses midnight"
        )
    return time_from_minutes(end_minutes)


def ordinal(n: int) -> str:
    """1 -> "1st", 2 -> "2nd", 11 -> "11th", 23 -> "23rd"."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _as_date(value: date | datetime) -> date:
    # datetime is a subclass of date; drop the time-of-day
    if isinstance(value, datetime):
        return value.date()
    return value


def format_long_date(value: date | datetime) -> str:
    """Format as "June 1, 2024"."""
    day = _as_date(value)
    return f"{day:%B} {day.day}, {day.year}"


def format_time_12h(value: str | time) -> str:
    """Format "09:00" as "9:00 AM"."""
    parsed = parse_time(value)
    hour = parsed.hour % 12 or 12
    period = "AM" if parsed.hour < 12 else "PM"
    return f"{hour}:{parsed.minute:02d} {period}"


def format_date_time(value: date | datetime, start: str | time) -> str:
    """Format as "June 1, 2024 at 9:00 AM"."""
    return f"{format_long_date(value)} at {format_time_12h(start)}"


def get_relative_day(value: date | datetime, today: date | datetime) -> str:
    """
    Human label for a date relative to a reference day.

    "Today", "Tomorrow" or "Yesterday" when within one calendar day;
    weekday and ordinal day ("Saturday, 15th") within the same month and
    year; otherwise the full date ("July 15, 2024"). Comparison is done on
    calendar days only.
    """
    day = _as_date(value)
    reference = _as_date(today)

    diff_days = (day - reference).days
    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Tomorrow"
    if diff_days == -1:
        return "Yesterday"

    if (day.year, day.month) == (reference.year, reference.month):
        return f"{day:%A}, {ordinal(day.day)}"
    return format_long_date(day)
