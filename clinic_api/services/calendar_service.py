"""Calendar service - day occupancy for the monthly calendar view."""

import calendar
import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import NamedTuple

from clinic_api.core.config import settings
from clinic_api.core.errors import InvalidScheduleParameters, InvariantViolation
from clinic_api.core.structured_logging import build_log_context
from clinic_api.enums import OccupancyBand
from clinic_api.schemas.appointment import Appointment
from clinic_api.services.appointment_service import active_appointments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OccupancyThresholds:
    """
    Policy constants for calendar bands.

    count < low_watermark                   -> available
    low_watermark <= count < high_watermark -> limited
    count >= high_watermark                 -> booked
    """
    low_watermark: int = 5
    high_watermark: int = 8

    def __post_init__(self) -> None:
        if self.low_watermark < 0:
            raise InvariantViolation(f"low_watermark must be >= 0, got {self.low_watermark}")
        if self.high_watermark < self.low_watermark:
            raise InvariantViolation(
                f"high_watermark ({self.high_watermark}) is below "
                f"low_watermark ({self.low_watermark})"
            )


class DayOccupancy(NamedTuple):
    date: date
    count: int
    band: OccupancyBand


def get_default_thresholds() -> OccupancyThresholds:
    """Thresholds from settings (OCCUPANCY_LOW_WATERMARK / OCCUPANCY_HIGH_WATERMARK)."""
    return OccupancyThresholds(
        low_watermark=settings.OCCUPANCY_LOW_WATERMARK,
        high_watermark=settings.OCCUPANCY_HIGH_WATERMARK,
    )


def classify_day_occupancy(
    count: int,
    thresholds: OccupancyThresholds | None = None,
) -> OccupancyBand:
    """Map a day's non-canceled appointment count to a calendar band."""
    if count < 0:
        raise InvariantViolation(f"Appointment count must be >= 0, got {count}")

    limits = thresholds or get_default_thresholds()
    if count < limits.low_watermark:
        return OccupancyBand.AVAILABLE
    if count < limits.high_watermark:
        return OccupancyBand.LIMITED
    return OccupancyBand.BOOKED


def count_active_by_date(
    appointments: Iterable[Appointment],
    room_id: int | None = None,
) -> Counter:
    """Non-canceled appointments per date, optionally for one room."""
    return Counter(appt.date for appt in active_appointments(appointments, room_id=room_id))


def build_occupancy_calendar(
    appointments: Iterable[Appointment],
    start_date: date,
    end_date: date,
    room_id: int | None = None,
    thresholds: OccupancyThresholds | None = None,
) -> list[DayOccupancy]:
    """
    Occupancy for every day from start_date to end_date inclusive.

    Args:
        appointments: Snapshot covering the range (others are ignored)
        start_date: First day
        end_date: Last day
        room_id: Only count this room's appointments
        thresholds: Band limits (settings when omitted)

    Raises:
        InvalidScheduleParameters: end_date is before start_date
    """
    if end_date < start_date:
        raise InvalidScheduleParameters(
            f"end_date ({end_date}) is before start_date ({start_date})"
        )

    limits = thresholds or get_default_thresholds()
    counts = count_active_by_date(appointments, room_id=room_id)

    days: list[DayOccupancy] = []
    current = start_date
    while current <= end_date:
        count = counts.get(current, 0)
        days.append(DayOccupancy(date=current, count=count, band=classify_day_occupancy(count, limits)))
        current += timedelta(days=1)

    logger.debug(
        "Built occupancy for %d day(s)",
        len(days),
        extra=build_log_context(room_id=room_id, on_date=start_date),
    )
    return days


def build_month_occupancy(
    appointments: Iterable[Appointment],
    year: int,
    month: int,
    room_id: int | None = None,
    thresholds: OccupancyThresholds | None = None,
) -> list[DayOccupancy]:
    """Occupancy for each day of a calendar month."""
    if not 1 <= month <= 12:
        raise InvalidScheduleParameters(f"month must be within 1..12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    return build_occupancy_calendar(
        appointments,
        date(year, month, 1),
        date(year, month, last_day),
        room_id=room_id,
        thresholds=thresholds,
    )
