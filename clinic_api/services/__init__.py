"""Service layer modules."""

from clinic_api.services.appointment_service import (
    ConflictResult,
    SlotRange,
    TimeSlot,
    check_conflicts,
    generate_time_slots,
    get_available_slots,
    transition_status,
)
from clinic_api.services.calendar_service import (
    DayOccupancy,
    OccupancyThresholds,
    build_month_occupancy,
    build_occupancy_calendar,
    classify_day_occupancy,
)

__all__ = [
    # Appointments
    "ConflictResult",
    "SlotRange",
    "TimeSlot",
    "check_conflicts",
    "generate_time_slots",
    "get_available_slots",
    "transition_status",
    # Calendar
    "DayOccupancy",
    "OccupancyThresholds",
    "build_month_occupancy",
    "build_occupancy_calendar",
    "classify_day_occupancy",
]
