"""Tests for settings loading."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from clinic_api.core.config import Settings
from clinic_api.core.structured_logging import build_log_context


def test_defaults(monkeypatch):
    for name in ("SLOT_INTERVAL_MINUTES", "OCCUPANCY_LOW_WATERMARK", "OCCUPANCY_HIGH_WATERMARK", "DEFAULT_TAX_RATE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.SLOT_INTERVAL_MINUTES == 30
    assert (settings.BUSINESS_HOURS_START, settings.BUSINESS_HOURS_END) == (8, 17)
    assert (settings.OCCUPANCY_LOW_WATERMARK, settings.OCCUPANCY_HIGH_WATERMARK) == (5, 8)
    assert settings.DEFAULT_TAX_RATE == Decimal("0.08")


def test_watermarks_from_environment(monkeypatch):
    monkeypatch.setenv("OCCUPANCY_LOW_WATERMARK", "3")
    monkeypatch.setenv("OCCUPANCY_HIGH_WATERMARK", "6")

    settings = Settings(_env_file=None)

    assert settings.OCCUPANCY_LOW_WATERMARK == 3
    assert settings.OCCUPANCY_HIGH_WATERMARK == 6


def test_inverted_watermarks_rejected(monkeypatch):
    monkeypatch.setenv("OCCUPANCY_LOW_WATERMARK", "9")
    monkeypatch.setenv("OCCUPANCY_HIGH_WATERMARK", "8")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_cors_origins_list():
    settings = Settings(_env_file=None, CORS_ORIGINS="http://a.test, http://b.test,")
    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


def test_log_context_only_carries_identifiers():
    context = build_log_context(room_id=0, appointment_id=12, on_date=date(2024, 6, 1))
    assert context == {"room_id": 0, "appointment_id": 12, "date": "2024-06-01"}
    assert build_log_context() == {}
