"""Pydantic schemas for API request/response models."""

from clinic_api.schemas.appointment import (
    Appointment,
    AppointmentCandidate,
    Room,
    Service,
)

__all__ = [
    "Appointment",
    "AppointmentCandidate",
    "Room",
    "Service",
]
