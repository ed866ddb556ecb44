"""Tests for the layered slot eligibility rules."""

from datetime import datetime, timezone

from booking_engine.scheduling.availability import AvailabilityIndex
from booking_engine.scheduling.block_registry import AdminBlockRegistry
from booking_engine.scheduling.eligibility import (
    BlockedDateRule,
    OverlapRule,
    PastTimeRule,
    check_slot_eligibility,
)
from booking_engine.scheduling.intervals import BookingInterval, TimeSlot
from booking_engine.scheduling.time_model import business_now
from booking_engine.schemas.catalog_schema import BlockedDate
from tests.conftest import SATURDAY, TODAY, fixed_clock

NOW = business_now("Asia/Manila", fixed_clock)


def _manila_at(utc_hour: int, minute: int, second: int = 0) -> datetime:
    utc = datetime(2025, 12, 19, utc_hour, minute, second, tzinfo=timezone.utc)
    return business_now("Asia/Manila", lambda: utc)


def _index(*slots: tuple[str, int]) -> AvailabilityIndex:
    return AvailabilityIndex(
        SATURDAY, [BookingInterval.from_slot(SATURDAY, t, d) for t, d in slots]
    )


class TestBlockedDateRule:
    def test_blocked_wins_over_empty_index(self):
        registry = AdminBlockRegistry([BlockedDate(date=SATURDAY, reason="Private event")])
        result = check_slot_eligibility(
            TimeSlot(SATURDAY, "10:00"), 45, _index(), registry, NOW
        )
        assert not result.eligible
        assert result.reason == "blocked"
        assert "Private event" in result.message

    def test_no_registry_never_blocks(self):
        assert BlockedDateRule(None).check(TimeSlot(SATURDAY, "10:00")).eligible


class TestPastTimeRule:
    def test_now_is_friday_afternoon_in_business_time(self):
        assert NOW.date().isoformat() == TODAY
        assert (NOW.hour, NOW.minute) == (14, 5)

    def test_earlier_slot_today_is_past(self):
        result = check_slot_eligibility(TimeSlot(TODAY, "14:00"), 45, None, None, NOW)
        assert not result.eligible
        assert result.reason == "past_time"

    def test_later_slot_today_is_open(self):
        assert check_slot_eligibility(TimeSlot(TODAY, "14:30"), 45, None, None, NOW).eligible

    def test_slot_stays_open_through_its_starting_minute(self):
        assert PastTimeRule(_manila_at(6, 0, 30)).check(TimeSlot(TODAY, "14:00")).eligible

    def test_slot_closes_a_minute_after_start(self):
        assert PastTimeRule(_manila_at(6, 1)).check(TimeSlot(TODAY, "14:00")).reason == "past_time"

    def test_yesterday_is_past(self):
        result = PastTimeRule(NOW).check(TimeSlot("2025-12-18", "18:00"))
        assert result.reason == "past_date"

    def test_future_date_any_time(self):
        assert PastTimeRule(NOW).check(TimeSlot(SATURDAY, "09:00")).eligible


class TestOverlapRule:
    def test_overlapping_slot_is_booked(self):
        result = check_slot_eligibility(
            TimeSlot(SATURDAY, "13:30"), 45, _index(("13:00", 45)), None, NOW
        )
        assert not result.eligible
        assert result.reason == "booked"

    def test_slot_starting_at_booking_end_is_open(self):
        assert check_slot_eligibility(
            TimeSlot(SATURDAY, "13:45"), 45, _index(("13:00", 45)), None, NOW
        ).eligible

    def test_long_package_reaches_into_later_booking(self):
        result = OverlapRule(_index(("14:00", 30)), 75).check(TimeSlot(SATURDAY, "13:00"))
        assert result.reason == "booked"

    def test_zero_duration_skips_overlap(self):
        assert OverlapRule(_index(("13:00", 45)), 0).check(TimeSlot(SATURDAY, "13:00")).eligible

    def test_missing_index_skips_overlap(self):
        assert OverlapRule(None, 45).check(TimeSlot(SATURDAY, "13:00")).eligible


class TestRuleOrder:
    def test_blocked_reported_before_past(self):
        registry = AdminBlockRegistry([BlockedDate(date="2025-12-18")])
        result = check_slot_eligibility(
            TimeSlot("2025-12-18", "10:00"), 45, None, registry, NOW
        )
        assert result.reason == "blocked"
