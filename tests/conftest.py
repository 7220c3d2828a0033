"""
Test configuration and fixtures.

Provides:
- Appointment factory for building snapshots
- HTTPX AsyncClient bound to the ASGI app
"""
from datetime import date, time
from typing import AsyncGenerator, Callable

import pytest
from httpx import AsyncClient, ASGITransport

from clinic_api.main import app
from clinic_api.enums import AppointmentStatus
from clinic_api.schemas.appointment import Appointment, Room, Service


# =============================================================================
# Record Fixtures
# =============================================================================

@pytest.fixture
def make_appointment() -> Callable[..., Appointment]:
    """Build appointments with sensible defaults; ids increase per call."""
    counter = {"next_id": 1}

    def _make(
        start: str = "09:00",
        duration: int = 60,
        room_id: int | None = 1,
        on_date: date = date(2024, 6, 1),
        status: AppointmentStatus = AppointmentStatus.SCHEDULED,
        appointment_id: int | None = None,
    ) -> Appointment:
        if appointment_id is None:
            appointment_id = counter["next_id"]
        counter["next_id"] = max(counter["next_id"], appointment_id) + 1
        hours, minutes = (int(part) for part in start.split(":"))
        return Appointment(
            id=appointment_id,
            patient_id=100 + appointment_id,
            service_id=1,
            room_id=room_id,
            date=on_date,
            start_time=time(hours, minutes),
            duration_minutes=duration,
            status=status,
        )

    return _make


@pytest.fixture
def facial_service() -> Service:
    return Service(id=1, name="Facial", duration_minutes=45, price="85.00")


@pytest.fixture
def treatment_room() -> Room:
    return Room(id=1, name="Room A", capacity=1, is_active=True)


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient against the ASGI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c
