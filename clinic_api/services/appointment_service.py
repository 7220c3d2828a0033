"""Appointment service - scheduling rules for the booking flow.

Handles:
- Candidate start times for a business day
- Conflict detection between appointments in the same room
- Open slots for a date, room and duration
- Status transitions (scheduled -> completed / canceled)

Everything here is pure: callers pass the appointment snapshot they fetched
for the room and date, and nothing is read from or written to storage.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import NamedTuple

from clinic_api.core.config import settings
from clinic_api.core.errors import (
    InvalidScheduleParameters,
    InvalidStatusTransition,
    InvariantViolation,
)
from clinic_api.core.structured_logging import build_log_context
from clinic_api.enums import AppointmentStatus
from clinic_api.schemas.appointment import Appointment, AppointmentCandidate, Room, Service
from clinic_api.utils.dates import (
    calculate_end_time,
    format_time_label,
    minutes_since_midnight,
    time_from_minutes,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Types
# =============================================================================

class TimeSlot(NamedTuple):
    """Open start time for a given duration."""
    start: time
    duration_minutes: int

    @property
    def end(self) -> time:
        return calculate_end_time(self.start, self.duration_minutes)


class ConflictResult(NamedTuple):
    """Outcome of a conflict check; an empty id list means no conflict."""
    has_conflict: bool
    conflicting_ids: list[int]


@dataclass(frozen=True)
class SlotRange:
    """
    Candidate start times from start_hour:00 to end_hour:00, inclusive.

    Iterating is lazy and can be repeated; each pass yields the same values.
    """
    interval_minutes: int
    start_hour: int
    end_hour: int

    def __post_init__(self) -> None:
        if self.interval_minutes <= 0:
            raise InvalidScheduleParameters(
                f"interval_minutes must be positive, got {self.interval_minutes}"
            )
        for name in ("start_hour", "end_hour"):
            hour = getattr(self, name)
            if not 0 <= hour <= 23:
                raise InvalidScheduleParameters(f"{name} must be within 0..23, got {hour}")
        if self.start_hour > self.end_hour:
            raise InvalidScheduleParameters(
                f"start_hour ({self.start_hour}) is after end_hour ({self.end_hour})"
            )

    def __iter__(self) -> Iterator[time]:
        current = self.start_hour * 60
        last = self.end_hour * 60
        while current <= last:
            yield time_from_minutes(current)
            current += self.interval_minutes

    def __len__(self) -> int:
        return (self.end_hour - self.start_hour) * 60 // self.interval_minutes + 1

    def labels(self) -> list[str]:
        """Start times as "HH:MM" strings."""
        return [format_time_label(t) for t in self]


# =============================================================================
# Slot Generation
# =============================================================================

def generate_time_slots(
    interval_minutes: int = 30,
    start_hour: int = 8,
    end_hour: int = 17,
) -> SlotRange:
    """
    Candidate start times within a business day.

    Args:
        interval_minutes: Step between slots
        start_hour: First slot hour (24-hour clock)
        end_hour: Last slot hour, included when the interval lands on it

    Raises:
        InvalidScheduleParameters: non-positive interval, hours outside
            0..23, or start_hour after end_hour
    """
    return SlotRange(
        interval_minutes=interval_minutes,
        start_hour=start_hour,
        end_hour=end_hour,
    )


# =============================================================================
# Conflict Detection
# =============================================================================

def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open overlap: back-to-back intervals do not overlap."""
    return start_a < end_b and start_b < end_a


def active_appointments(
    appointments: Iterable[Appointment],
    room_id: int | None = None,
    on_date: date | None = None,
) -> list[Appointment]:
    """Non-canceled appointments, optionally narrowed to a room and/or date."""
    return [
        appt for appt in appointments
        if appt.is_active
        and (room_id is None or appt.room_id == room_id)
        and (on_date is None or appt.date == on_date)
    ]


def _appointment_bounds(appt: AppointmentCandidate) -> tuple[int, int]:
    end = calculate_end_time(appt.start_time, appt.duration_minutes)
    return minutes_since_midnight(appt.start_time), minutes_since_midnight(end)


def check_conflicts(
    candidate: AppointmentCandidate,
    existing: Iterable[Appointment],
) -> ConflictResult:
    """
    Check whether a candidate overlaps any existing appointment.

    The caller supplies appointments already fetched for the candidate's
    room and date. Entries that are canceled, in another room, on another
    day, or that are the candidate itself (rescheduling) are ignored.

    Raises:
        OutOfRangeDuration: the candidate would run past midnight
        InvariantViolation: the candidate duration is not positive
    """
    if getattr(candidate, "status", None) == AppointmentStatus.CANCELED:
        return ConflictResult(has_conflict=False, conflicting_ids=[])

    start, end = _appointment_bounds(candidate)

    conflicting_ids: list[int] = []
    for appt in existing:
        if not appt.is_active:
            continue
        if candidate.id is not None and appt.id == candidate.id:
            continue
        if appt.date != candidate.date or appt.room_id != candidate.room_id:
            continue

        appt_start, appt_end = _appointment_bounds(appt)
        if intervals_overlap(start, end, appt_start, appt_end):
            conflicting_ids.append(appt.id)

    if conflicting_ids:
        logger.debug(
            "Candidate %s overlaps %d appointment(s)",
            format_time_label(candidate.start_time),
            len(conflicting_ids),
            extra=build_log_context(room_id=candidate.room_id, on_date=candidate.date),
        )
    return ConflictResult(has_conflict=bool(conflicting_ids), conflicting_ids=conflicting_ids)


# =============================================================================
# Available Slots
# =============================================================================

def resolve_duration(service: Service | None, duration_minutes: int | None = None) -> int:
    """Explicit duration wins; otherwise the service's standard duration."""
    if duration_minutes is not None:
        if duration_minutes <= 0:
            raise InvariantViolation(f"Duration must be positive, got {duration_minutes}")
        return duration_minutes
    if service is None:
        raise InvariantViolation("Either a duration or a service is required")
    return service.duration_minutes


def get_available_slots(
    appointments: Iterable[Appointment],
    on_date: date,
    duration_minutes: int,
    room: Room | None = None,
    room_id: int | None = None,
    interval_minutes: int | None = None,
    start_hour: int | None = None,
    end_hour: int | None = None,
    now: datetime | None = None,
) -> list[TimeSlot]:
    """
    Calculate open start times for a date.

    A slot is open when fewer active appointments overlap it than the room's
    capacity (1 without a room). A slot must finish by end_hour:00, an
    inactive room has none, and when `now` is given slots at or before it
    are dropped.

    Checks:
    - Room active flag and capacity
    - Existing non-canceled appointments in the same room and day
    - Reference time (past dates and past slots today)
    """
    if duration_minutes <= 0:
        raise InvariantViolation(f"Duration must be positive, got {duration_minutes}")

    capacity = 1
    if room is not None:
        if not room.is_active:
            return []
        room_id = room.id
        capacity = room.capacity

    slot_range = generate_time_slots(
        interval_minutes if interval_minutes is not None else settings.SLOT_INTERVAL_MINUTES,
        start_hour if start_hour is not None else settings.BUSINESS_HOURS_START,
        end_hour if end_hour is not None else settings.BUSINESS_HOURS_END,
    )

    cutoff: time | None = None
    if now is not None:
        today = now.date()
        if on_date < today:
            return []
        if on_date == today:
            cutoff = now.time()

    day_end = slot_range.end_hour * 60
    booked = [
        _appointment_bounds(appt)
        for appt in active_appointments(appointments, on_date=on_date)
        if appt.room_id == room_id
    ]

    slots: list[TimeSlot] = []
    for start in slot_range:
        if cutoff is not None and start <= cutoff:
            continue
        slot_start = minutes_since_midnight(start)
        slot_end = slot_start + duration_minutes
        if slot_end > day_end:
            continue

        overlapping = sum(
            1 for appt_start, appt_end in booked
            if intervals_overlap(slot_start, slot_end, appt_start, appt_end)
        )
        if overlapping < capacity:
            slots.append(TimeSlot(start=start, duration_minutes=duration_minutes))

    logger.debug(
        "Found %d open slot(s) of %d min",
        len(slots),
        duration_minutes,
        extra=build_log_context(room_id=room_id, on_date=on_date),
    )
    return slots


# =============================================================================
# Status Transitions
# =============================================================================

_ALLOWED_TRANSITIONS: dict[AppointmentStatus, set[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELED},
}


def transition_status(
    appointment: Appointment,
    new_status: AppointmentStatus | str,
) -> Appointment:
    """
    Return a copy of the appointment with its status changed.

    Only scheduled appointments move, to completed or canceled. Setting the
    current status again is a no-op.
    """
    target = AppointmentStatus(new_status)
    if appointment.status == target:
        return appointment

    allowed = _ALLOWED_TRANSITIONS.get(appointment.status, set())
    if target not in allowed:
        raise InvalidStatusTransition(
            f"Cannot move appointment {appointment.id} from "
            f"{appointment.status.value} to {target.value}"
        )

    logger.info(
        "Appointment status %s -> %s",
        appointment.status.value,
        target.value,
        extra=build_log_context(appointment_id=appointment.id, room_id=appointment.room_id),
    )
    return appointment.model_copy(update={"status": target})


def cancel_appointment(appointment: Appointment) -> Appointment:
    return transition_status(appointment, AppointmentStatus.CANCELED)


def complete_appointment(appointment: Appointment) -> Appointment:
    return transition_status(appointment, AppointmentStatus.COMPLETED)
