"""Structured logging helpers (PHI-safe)."""

import logging
from datetime import date
from typing import Any


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the API process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_log_context(
    *,
    room_id: int | None = None,
    appointment_id: int | None = None,
    on_date: date | None = None,
    request_id: str | None = None,
    route: str | None = None,
) -> dict[str, Any]:
    """Return a PHI-safe log context dict.

    Only identifiers go in here; patient names, notes and contact details
    never do.
    """
    context: dict[str, Any] = {}
    if room_id is not None:
        context["room_id"] = room_id
    if appointment_id is not None:
        context["appointment_id"] = appointment_id
    if on_date is not None:
        context["date"] = on_date.isoformat()
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    return context
