"""Tests for business-day slot generation."""

from datetime import time

import pytest

from clinic_api.core.errors import InvalidScheduleParameters
from clinic_api.services.appointment_service import SlotRange, generate_time_slots


class TestGenerateTimeSlots:
    """Tests for the candidate start-time sequence."""

    def test_default_business_day(self):
        """30-minute slots from 08:00 through 17:00 inclusive."""
        slots = generate_time_slots(30, 8, 17)
        labels = slots.labels()

        assert len(slots) == 19
        assert len(labels) == 19
        assert labels[0] == "08:00"
        assert labels[1] == "08:30"
        assert labels[-1] == "17:00"

    def test_defaults_match_original_dashboard(self):
        assert generate_time_slots().labels() == generate_time_slots(30, 8, 17).labels()

    @pytest.mark.parametrize(
        "interval,start_hour,end_hour",
        [(15, 9, 12), (60, 0, 23), (20, 10, 11), (45, 8, 17), (90, 6, 6)],
    )
    def test_count_and_ordering(self, interval, start_hour, end_hour):
        slots = list(generate_time_slots(interval, start_hour, end_hour))

        assert len(slots) == (end_hour - start_hour) * 60 // interval + 1
        assert slots[0] == time(start_hour, 0)
        assert all(a < b for a, b in zip(slots, slots[1:]))
        assert slots[-1] <= time(end_hour, 0)

    def test_last_slot_is_end_hour_when_interval_divides(self):
        slots = list(generate_time_slots(20, 10, 12))
        assert slots[-1] == time(12, 0)

    def test_interval_not_dividing_stops_before_end(self):
        """40-minute steps from 08:00 never land on 17:00."""
        slots = generate_time_slots(40, 8, 17).labels()
        assert slots[-1] == "16:40"
        assert len(slots) == 14

    def test_single_hour_range(self):
        assert generate_time_slots(30, 12, 12).labels() == ["12:00"]

    def test_restartable_and_idempotent(self):
        slots = generate_time_slots(30, 8, 17)
        first_pass = list(slots)
        second_pass = list(slots)

        assert first_pass == second_pass
        assert generate_time_slots(30, 8, 17).labels() == generate_time_slots(30, 8, 17).labels()

    def test_lazy_iteration(self):
        iterator = iter(generate_time_slots(1, 0, 23))
        assert next(iterator) == time(0, 0)
        assert next(iterator) == time(0, 1)

    @pytest.mark.parametrize(
        "interval,start_hour,end_hour",
        [(0, 8, 17), (-15, 8, 17), (30, 17, 8), (30, -1, 8), (30, 8, 24)],
    )
    def test_invalid_parameters_fail_at_call_time(self, interval, start_hour, end_hour):
        with pytest.raises(InvalidScheduleParameters):
            generate_time_slots(interval, start_hour, end_hour)

    def test_direct_construction_is_validated(self):
        with pytest.raises(InvalidScheduleParameters):
            SlotRange(interval_minutes=0, start_hour=8, end_hour=17)
