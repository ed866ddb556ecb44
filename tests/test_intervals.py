"""Tests for booking intervals and the overlap test."""

import pytest

from booking_engine.scheduling.intervals import BookingInterval, TimeSlot, overlaps

D = "2025-12-20"


def iv(start: int, end: int, date: str = D) -> BookingInterval:
    return BookingInterval(date=date, start_minutes=start, end_minutes=end)


class TestOverlap:
    def test_touching_intervals_do_not_overlap(self):
        assert overlaps(iv(600, 645), iv(645, 700)) is False

    def test_partial_overlap(self):
        assert overlaps(iv(600, 650), iv(640, 700)) is True

    def test_containment(self):
        assert overlaps(iv(600, 720), iv(630, 660)) is True

    def test_identical(self):
        assert overlaps(iv(780, 825), iv(780, 825)) is True

    def test_different_dates_never_overlap(self):
        assert overlaps(iv(600, 700), iv(600, 700, date="2025-12-21")) is False

    @pytest.mark.parametrize(
        "a,b",
        [
            ((600, 645), (645, 700)),
            ((600, 650), (640, 700)),
            ((540, 600), (700, 760)),
            ((600, 720), (630, 660)),
        ],
    )
    def test_symmetric(self, a, b):
        assert overlaps(iv(*a), iv(*b)) == overlaps(iv(*b), iv(*a))


class TestBookingInterval:
    def test_from_slot(self):
        interval = BookingInterval.from_slot(D, "13:00", 45)
        assert (interval.start_minutes, interval.end_minutes) == (780, 825)
        assert interval.duration == 45

    def test_end_may_pass_midnight(self):
        interval = BookingInterval.from_slot(D, "23:30", 60)
        assert interval.end_minutes == 1470

    def test_zero_duration_rejected(self):
        with pytest.raises(ValueError):
            BookingInterval.from_slot(D, "13:00", 0)

    def test_start_out_of_day_rejected(self):
        with pytest.raises(ValueError):
            iv(1440, 1500)

    def test_is_immutable(self):
        interval = iv(600, 645)
        with pytest.raises(AttributeError):
            interval.start_minutes = 0  # type: ignore[misc]


class TestTimeSlot:
    def test_start_minutes(self):
        assert TimeSlot(date=D, time="09:30").start_minutes == 570

    def test_value_equality(self):
        assert TimeSlot(D, "09:30") == TimeSlot(D, "09:30")
