"""Scheduling router - slot, end-time and conflict endpoints.

Request bodies carry the appointment snapshot the caller already fetched for
the room and date; nothing is persisted here.
"""

import logging

from fastapi import APIRouter, HTTPException, Query

from clinic_api.core.config import settings
from clinic_api.core.errors import InvalidStatusTransition, SchedulingError
from clinic_api.core.structured_logging import build_log_context
from clinic_api.schemas.appointment import (
    Appointment,
    AvailableSlotsRequest,
    AvailableSlotsResponse,
    ConflictCheckRequest,
    ConflictCheckResponse,
    EndTimeResponse,
    StatusTransitionRequest,
    TimeSlotListResponse,
    TimeSlotRead,
)
from clinic_api.services import appointment_service
from clinic_api.utils.dates import calculate_end_time, format_time_label, parse_time

logger = logging.getLogger(__name__)

router = APIRouter()


def _slot_to_read(slot: appointment_service.TimeSlot) -> TimeSlotRead:
    return TimeSlotRead(
        start_time=format_time_label(slot.start),
        end_time=format_time_label(slot.end),
        duration_minutes=slot.duration_minutes,
    )


@router.get("/time-slots", response_model=TimeSlotListResponse)
def list_time_slots(
    interval: int = Query(None, description="Minutes between slots"),
    start_hour: int = Query(None, description="First slot hour (0-23)"),
    end_hour: int = Query(None, description="Last slot hour (0-23)"),
):
    """Candidate start times for the business day."""
    interval = interval if interval is not None else settings.SLOT_INTERVAL_MINUTES
    start_hour = start_hour if start_hour is not None else settings.BUSINESS_HOURS_START
    end_hour = end_hour if end_hour is not None else settings.BUSINESS_HOURS_END
    try:
        slot_range = appointment_service.generate_time_slots(interval, start_hour, end_hour)
    except SchedulingError as e:
        logger.info(f"Rejected slot parameters: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return TimeSlotListResponse(
        interval_minutes=interval,
        start_hour=start_hour,
        end_hour=end_hour,
        slots=slot_range.labels(),
    )


@router.get("/end-time", response_model=EndTimeResponse)
def get_end_time(
    start_time: str = Query(..., description="Start time (HH:MM)"),
    duration_minutes: int = Query(..., description="Duration in minutes"),
):
    """End time for an appointment; rejects durations that cross midnight."""
    try:
        start = parse_time(start_time)
        end = calculate_end_time(start, duration_minutes)
    except SchedulingError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return EndTimeResponse(
        start_time=format_time_label(start),
        duration_minutes=duration_minutes,
        end_time=format_time_label(end),
    )


@router.post("/conflicts", response_model=ConflictCheckResponse)
def check_conflicts(data: ConflictCheckRequest):
    """Check a candidate against existing appointments for its room and date."""
    try:
        result = appointment_service.check_conflicts(data.candidate, data.existing)
    except SchedulingError as e:
        logger.info(
            f"Rejected conflict check: {e}",
            extra=build_log_context(room_id=data.candidate.room_id, on_date=data.candidate.date),
        )
        raise HTTPException(status_code=422, detail=str(e))

    return ConflictCheckResponse(
        has_conflict=result.has_conflict,
        conflicting_appointment_ids=result.conflicting_ids,
    )


@router.post("/available-slots", response_model=AvailableSlotsResponse)
def get_available_slots(data: AvailableSlotsRequest):
    """Open start times for a date, room and duration."""
    try:
        duration = appointment_service.resolve_duration(data.service, data.duration_minutes)
        slots = appointment_service.get_available_slots(
            data.appointments,
            data.date,
            duration,
            room=data.room,
            room_id=data.room_id,
            interval_minutes=data.interval_minutes,
            start_hour=data.start_hour,
            end_hour=data.end_hour,
            now=data.now,
        )
    except SchedulingError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return AvailableSlotsResponse(
        date=data.date,
        room_id=data.room.id if data.room else data.room_id,
        slots=[_slot_to_read(s) for s in slots],
    )


@router.post("/appointments/transition", response_model=Appointment)
def transition_appointment(data: StatusTransitionRequest):
    """Apply a status change (scheduled -> completed / canceled)."""
    try:
        return appointment_service.transition_status(data.appointment, data.status)
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
