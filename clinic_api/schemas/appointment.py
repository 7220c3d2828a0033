"""Appointment schemas - Pydantic models for the scheduling API.

Appointment, Service and Room mirror the records owned by the storage layer.
The engine only reads them; callers pass a snapshot already fetched for the
room and date in question.
"""

from datetime import date, datetime, time
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from clinic_api.enums import DEFAULT_APPOINTMENT_STATUS, AppointmentStatus, OccupancyBand, PaymentStatus
from clinic_api.utils.dates import calculate_end_time


# =============================================================================
# Records
# =============================================================================

class Service(BaseModel):
    """Treatment offered by the clinic."""
    id: int
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    duration_minutes: int = Field(..., gt=0, le=1440)
    price: Decimal = Field(..., ge=0)


class Room(BaseModel):
    """Treatment room; double-booking is checked per room."""
    id: int
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    capacity: int = Field(1, ge=1)
    is_active: bool = True


class AppointmentCandidate(BaseModel):
    """Interval to check before booking.

    `id` is set when rescheduling an existing appointment so it does not
    conflict with itself.
    """
    id: int | None = None
    room_id: int | None = None
    date: date
    start_time: time
    duration_minutes: int = Field(..., gt=0)

    @model_validator(mode="after")
    def validate_same_day(self) -> "AppointmentCandidate":
        """Reject intervals that run past midnight."""
        calculate_end_time(self.start_time, self.duration_minutes)
        return self


class Appointment(AppointmentCandidate):
    """Booked (or canceled) treatment slot."""
    id: int
    patient_id: int | None = None
    service_id: int | None = None
    status: AppointmentStatus = DEFAULT_APPOINTMENT_STATUS
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status in AppointmentStatus.active()


# =============================================================================
# Slots and conflicts
# =============================================================================

class TimeSlotListResponse(BaseModel):
    """Candidate start times for a business day."""
    interval_minutes: int
    start_hour: int
    end_hour: int
    slots: list[str]


class EndTimeResponse(BaseModel):
    start_time: str
    duration_minutes: int
    end_time: str


class ConflictCheckRequest(BaseModel):
    """Candidate plus the existing appointments for its room and date."""
    candidate: AppointmentCandidate
    existing: list[Appointment] = Field(default_factory=list)


class ConflictCheckResponse(BaseModel):
    has_conflict: bool
    conflicting_appointment_ids: list[int]


class AvailableSlotsRequest(BaseModel):
    """Request open start times for a date.

    Either `duration_minutes` or `service` must be provided; an explicit
    duration wins.
    """
    date: date
    duration_minutes: int | None = Field(None, gt=0)
    service: Service | None = None
    room: Room | None = None
    room_id: int | None = None
    appointments: list[Appointment] = Field(default_factory=list)
    interval_minutes: int | None = None
    start_hour: int | None = None
    end_hour: int | None = None
    now: datetime | None = None


class TimeSlotRead(BaseModel):
    start_time: str
    end_time: str
    duration_minutes: int


class AvailableSlotsResponse(BaseModel):
    date: date
    room_id: int | None
    slots: list[TimeSlotRead]


class StatusTransitionRequest(BaseModel):
    appointment: Appointment
    status: AppointmentStatus


# =============================================================================
# Calendar
# =============================================================================

class OccupancyRequest(BaseModel):
    """Appointments covering the range to render."""
    start_date: date
    end_date: date
    room_id: int | None = None
    appointments: list[Appointment] = Field(default_factory=list)


class DayOccupancyRead(BaseModel):
    date: date
    count: int
    band: OccupancyBand
    label: str


class OccupancyResponse(BaseModel):
    low_watermark: int
    high_watermark: int
    days: list[DayOccupancyRead]


class OccupancyBandResponse(BaseModel):
    count: int
    band: OccupancyBand


class RelativeDayResponse(BaseModel):
    date: date
    today: date
    label: str


# =============================================================================
# Billing
# =============================================================================

class TaxBreakdownRead(BaseModel):
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal
    formatted_subtotal: str
    formatted_tax_amount: str
    formatted_total: str
