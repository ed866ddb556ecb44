"""
Layered slot eligibility checks.

Three independent rules, evaluated in order, first failure wins:
1. BlockedDateRule: operator closed the date (takes precedence over all)
2. PastTimeRule: date or start time already passed in business time
3. OverlapRule: interval intersects an active reservation

These are composed into an EligibilityPipeline; check_slot_eligibility is
the one-call entry point used by the slot board and the submission
protocol.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from booking_engine.scheduling.availability import AvailabilityIndex
from booking_engine.scheduling.block_registry import AdminBlockRegistry
from booking_engine.scheduling.intervals import BookingInterval, TimeSlot
from booking_engine.scheduling.time_model import parse_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EligibilityResult:
    """Outcome of a single eligibility check."""
    eligible: bool
    reason: Optional[str] = None  # "blocked" | "past_date" | "past_time" | "booked"
    message: Optional[str] = None


ELIGIBLE = EligibilityResult(eligible=True)


class BlockedDateRule:
    """Rejects every slot on a date the operator has blocked."""

    def __init__(self, registry: Optional[AdminBlockRegistry]) -> None:
        self.registry = registry

    def check(self, slot: TimeSlot) -> EligibilityResult:
        if self.registry is not None and self.registry.is_blocked(slot.date):
            return EligibilityResult(
                eligible=False,
                reason="blocked",
                message=f"Unavailable: {self.registry.reason_for(slot.date)}",
            )
        return ELIGIBLE


class PastTimeRule:
    """Rejects slots that start before 'now' in the business timezone."""

    def __init__(self, now: datetime) -> None:
        # Minute resolution, like comparing HH:MM strings: 14:00 stays open until 14:01.
        self.today = now.date()
        self.now_minutes = now.hour * 60 + now.minute

    def check(self, slot: TimeSlot) -> EligibilityResult:
        day = parse_date(slot.date)
        if day < self.today:
            return EligibilityResult(
                eligible=False, reason="past_date", message=f"{slot.date} has passed."
            )
        if day == self.today and slot.start_minutes < self.now_minutes:
            return EligibilityResult(
                eligible=False, reason="past_time", message=f"{slot.time} has passed."
            )
        return ELIGIBLE


class OverlapRule:
    """Rejects slots whose interval intersects a booked interval."""

    def __init__(self, index: Optional[AvailabilityIndex], duration_total: int) -> None:
        self.index = index
        self.duration_total = duration_total

    def check(self, slot: TimeSlot) -> EligibilityResult:
        # No package chosen yet: nothing to measure against.
        if self.index is None or self.duration_total <= 0:
            return ELIGIBLE
        candidate = BookingInterval.from_slot(slot.date, slot.time, self.duration_total)
        if self.index.overlaps(candidate):
            return EligibilityResult(
                eligible=False,
                reason="booked",
                message=f"{slot.time} overlaps an existing booking.",
            )
        return ELIGIBLE


class EligibilityPipeline:
    """Composes the rules for one date, duration and moment."""

    def __init__(
        self,
        registry: Optional[AdminBlockRegistry],
        index: Optional[AvailabilityIndex],
        duration_total: int,
        now: datetime,
    ) -> None:
        self.rules = [
            BlockedDateRule(registry),
            PastTimeRule(now),
            OverlapRule(index, duration_total),
        ]

    def check(self, slot: TimeSlot) -> EligibilityResult:
        for rule in self.rules:
            result = rule.check(slot)
            if not result.eligible:
                logger.debug(
                    "Slot %s %s ineligible: %s", slot.date, slot.time, result.reason
                )
                return result
        return ELIGIBLE


def check_slot_eligibility(
    slot: TimeSlot,
    duration_total: int,
    index: Optional[AvailabilityIndex],
    registry: Optional[AdminBlockRegistry],
    now: datetime,
) -> EligibilityResult:
    """Decide whether a slot may be selected.

    ``now`` must already be expressed in the business timezone.
    """
    return EligibilityPipeline(registry, index, duration_total, now).check(slot)
