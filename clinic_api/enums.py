"""Enum definitions for scheduling values."""

from enum import Enum


class AppointmentStatus(str, Enum):
    """
    Appointment lifecycle status.

    Flow: scheduled → completed
              ↘ canceled

    Appointments are never deleted; canceled ones stay on record but are
    ignored for conflicts and occupancy.
    """
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELED = "canceled"

    @classmethod
    def active(cls) -> list[str]:
        """Statuses that hold a room and count toward occupancy."""
        return [cls.SCHEDULED.value, cls.COMPLETED.value]


class PaymentStatus(str, Enum):
    """Payment state recorded on an appointment."""
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class OccupancyBand(str, Enum):
    """Calendar cell classification for a single day."""
    AVAILABLE = "available"
    LIMITED = "limited"
    BOOKED = "booked"


# Default appointment status
DEFAULT_APPOINTMENT_STATUS = AppointmentStatus.SCHEDULED
