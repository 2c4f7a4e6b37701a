from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.services.slots import (
    business_day_bounds,
    compute_slots,
    get_business_timezone,
    intervals_overlap,
    to_utc,
)

DAY = date(2030, 3, 6)
DAY_START, DAY_END = business_day_bounds(DAY, timezone.utc)


def booked(start_hour, start_minute, end_hour, end_minute, status="pending"):
    return SimpleNamespace(
        start_time=datetime(2030, 3, 6, start_hour, start_minute, tzinfo=timezone.utc),
        end_time=datetime(2030, 3, 6, end_hour, end_minute, tzinfo=timezone.utc),
        status=status,
    )


class TestIntervalsOverlap:
    """Half-open interval overlap predicate."""

    def test_partial_overlap(self):
        a = (datetime(2030, 1, 1, 10, 0), datetime(2030, 1, 1, 10, 30))
        b = (datetime(2030, 1, 1, 10, 15), datetime(2030, 1, 1, 10, 45))
        assert intervals_overlap(*a, *b)
        assert intervals_overlap(*b, *a)

    def test_containment_overlaps(self):
        outer = (datetime(2030, 1, 1, 9, 0), datetime(2030, 1, 1, 12, 0))
        inner = (datetime(2030, 1, 1, 10, 0), datetime(2030, 1, 1, 10, 30))
        assert intervals_overlap(*outer, *inner)
        assert intervals_overlap(*inner, *outer)

    def test_touching_intervals_do_not_overlap(self):
        a = (datetime(2030, 1, 1, 10, 0), datetime(2030, 1, 1, 10, 30))
        b = (datetime(2030, 1, 1, 10, 30), datetime(2030, 1, 1, 11, 0))
        assert not intervals_overlap(*a, *b)
        assert not intervals_overlap(*b, *a)


class TestBusinessDayBounds:
    def test_default_hours(self):
        assert DAY_START == datetime(2030, 3, 6, 9, 0, tzinfo=timezone.utc)
        assert DAY_END == datetime(2030, 3, 6, 18, 0, tzinfo=timezone.utc)

    def test_bounds_follow_business_timezone(self):
        tz = timezone(timedelta(hours=2))
        start, end = business_day_bounds(DAY, tz, open_hour=8, close_hour=17)

        assert to_utc(start) == datetime(2030, 3, 6, 6, 0, tzinfo=timezone.utc)
        assert to_utc(end) == datetime(2030, 3, 6, 15, 0, tzinfo=timezone.utc)

    def test_utc_name_resolves_without_tz_database(self):
        assert get_business_timezone("UTC") is timezone.utc


class TestComputeSlots:
    """Slot generation across the business day."""

    def test_empty_day_with_30_minute_slots(self):
        slots = compute_slots([], DAY_START, DAY_END, 30)

        assert len(slots) == 18
        assert all(slot.available for slot in slots)
        assert slots[0].start_time == DAY_START
        assert slots[-1].end_time == DAY_END

    def test_slots_are_contiguous(self):
        slots = compute_slots([], DAY_START, DAY_END, 45)

        for previous, current in zip(slots, slots[1:]):
            assert previous.end_time == current.start_time
            assert current.end_time - current.start_time == timedelta(minutes=45)

    @pytest.mark.parametrize(
        "duration,expected",
        [(30, 18), (45, 12), (60, 9), (90, 6), (120, 4)],
    )
    def test_slot_count_is_floor_of_day_over_duration(self, duration, expected):
        slots = compute_slots([], DAY_START, DAY_END, duration)
        assert len(slots) == expected
        assert slots[-1].end_time <= DAY_END

    def test_booked_interval_blocks_matching_slot(self):
        slots = compute_slots([booked(10, 0, 10, 30)], DAY_START, DAY_END, 30)

        blocked = [(s.start_time.hour, s.start_time.minute) for s in slots if not s.available]
        assert blocked == [(10, 0)]

    def test_straddling_booking_blocks_both_slots(self):
        slots = compute_slots([booked(10, 15, 10, 45)], DAY_START, DAY_END, 30)

        blocked = [(s.start_time.hour, s.start_time.minute) for s in slots if not s.available]
        assert blocked == [(10, 0), (10, 30)]

    def test_adjacent_booking_does_not_block(self):
        slots = compute_slots([booked(10, 30, 11, 0)], DAY_START, DAY_END, 30)
        by_start = {(s.start_time.hour, s.start_time.minute): s for s in slots}

        assert by_start[(10, 0)].available
        assert not by_start[(10, 30)].available
        assert by_start[(11, 0)].available

    def test_cancelled_viewings_are_ignored(self):
        slots = compute_slots(
            [booked(10, 0, 10, 30, status="cancelled")], DAY_START, DAY_END, 30
        )
        assert all(slot.available for slot in slots)

    def test_naive_stored_times_are_treated_as_utc(self):
        viewing = SimpleNamespace(
            start_time=datetime(2030, 3, 6, 9, 0),
            end_time=datetime(2030, 3, 6, 10, 0),
            status="confirmed",
        )
        slots = compute_slots([viewing], DAY_START, DAY_END, 60)

        assert not slots[0].available
        assert all(slot.available for slot in slots[1:])

    def test_non_positive_duration_rejected(self):
        with pytest.raises(ValueError):
            compute_slots([], DAY_START, DAY_END, 0)
