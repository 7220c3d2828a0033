"""Tests for day occupancy classification and the calendar range builder."""

from datetime import date

import pytest

from clinic_api.core.errors import InvalidScheduleParameters, InvariantViolation
from clinic_api.enums import AppointmentStatus, OccupancyBand
from clinic_api.services.calendar_service import (
    OccupancyThresholds,
    build_month_occupancy,
    build_occupancy_calendar,
    classify_day_occupancy,
    count_active_by_date,
)


class TestClassifyDayOccupancy:

    @pytest.mark.parametrize(
        "count,expected",
        [
            (0, OccupancyBand.AVAILABLE),
            (4, OccupancyBand.AVAILABLE),
            (5, OccupancyBand.LIMITED),
            (7, OccupancyBand.LIMITED),
            (8, OccupancyBand.BOOKED),
            (30, OccupancyBand.BOOKED),
        ],
    )
    def test_default_bands(self, count, expected):
        assert classify_day_occupancy(count) == expected

    def test_negative_count_fails_fast(self):
        with pytest.raises(InvariantViolation):
            classify_day_occupancy(-1)

    def test_custom_thresholds(self):
        thresholds = OccupancyThresholds(low_watermark=2, high_watermark=3)

        assert classify_day_occupancy(1, thresholds) == OccupancyBand.AVAILABLE
        assert classify_day_occupancy(2, thresholds) == OccupancyBand.LIMITED
        assert classify_day_occupancy(3, thresholds) == OccupancyBand.BOOKED

    def test_equal_watermarks_skip_limited(self):
        thresholds = OccupancyThresholds(low_watermark=4, high_watermark=4)
        assert classify_day_occupancy(3, thresholds) == OccupancyBand.AVAILABLE
        assert classify_day_occupancy(4, thresholds) == OccupancyBand.BOOKED

    def test_default_threshold_values(self):
        thresholds = OccupancyThresholds()
        assert (thresholds.low_watermark, thresholds.high_watermark) == (5, 8)

    @pytest.mark.parametrize("low,high", [(-1, 8), (6, 5)])
    def test_invalid_thresholds(self, low, high):
        with pytest.raises(InvariantViolation):
            OccupancyThresholds(low_watermark=low, high_watermark=high)


class TestOccupancyCalendar:

    def test_counts_only_non_canceled(self, make_appointment):
        appointments = [
            make_appointment(start="09:00"),
            make_appointment(start="10:00"),
            make_appointment(start="11:00", status=AppointmentStatus.CANCELED),
            make_appointment(start="12:00", status=AppointmentStatus.COMPLETED),
        ]

        counts = count_active_by_date(appointments)

        assert counts[date(2024, 6, 1)] == 3

    def test_range_covers_every_day(self, make_appointment):
        busy_day = date(2024, 6, 3)
        appointments = [
            make_appointment(start=f"{hour:02d}:00", on_date=busy_day) for hour in range(8, 16)
        ]
        appointments += [make_appointment(start=f"{hour:02d}:00", on_date=date(2024, 6, 2)) for hour in (9, 10, 11, 12, 13)]

        days = build_occupancy_calendar(appointments, date(2024, 6, 1), date(2024, 6, 4))

        assert [d.date for d in days] == [date(2024, 6, day) for day in range(1, 5)]
        assert [d.count for d in days] == [0, 5, 8, 0]
        assert [d.band for d in days] == [
            OccupancyBand.AVAILABLE,
            OccupancyBand.LIMITED,
            OccupancyBand.BOOKED,
            OccupancyBand.AVAILABLE,
        ]

    def test_room_filter(self, make_appointment):
        appointments = [
            make_appointment(start="09:00", room_id=1),
            make_appointment(start="09:00", room_id=2),
        ]

        days = build_occupancy_calendar(appointments, date(2024, 6, 1), date(2024, 6, 1), room_id=2)

        assert days[0].count == 1

    def test_inverted_range(self):
        with pytest.raises(InvalidScheduleParameters):
            build_occupancy_calendar([], date(2024, 6, 2), date(2024, 6, 1))

    def test_month(self, make_appointment):
        days = build_month_occupancy([make_appointment(on_date=date(2024, 2, 29))], 2024, 2)

        assert len(days) == 29
        assert days[-1].date == date(2024, 2, 29)
        assert days[-1].count == 1

    def test_invalid_month(self):
        with pytest.raises(InvalidScheduleParameters):
            build_month_occupancy([], 2024, 13)
