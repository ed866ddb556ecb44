"""
Per-date availability index built from the reservation store.

The index is a snapshot: it is built from one store query for one date
and never patched. Rejected and cancelled reservations are left out so
they do not block slots.

Usage:
    index = await AvailabilityIndex.build(store, "2025-12-20")
    index.overlaps(BookingInterval.from_slot("2025-12-20", "13:00", 45))
"""

from typing import Iterable

from booking_engine.errors import ParseError
from booking_engine.logging_context import get_attempt_logger
from booking_engine.ports import ReservationStorePort
from booking_engine.schemas.booking_schema import AvailabilityProjection
from booking_engine.scheduling.intervals import BookingInterval

logger = get_attempt_logger(__name__)


def intervals_from_entries(
    date: str, entries: Iterable[AvailabilityProjection]
) -> list[BookingInterval]:
    """Turn store entries into intervals, keeping only ones that hold a slot."""
    intervals: list[BookingInterval] = []
    for entry in entries:
        if not entry.status.holds_slot:
            continue
        if entry.date != date or not entry.time or entry.duration_total <= 0:
            continue
        try:
            intervals.append(
                BookingInterval.from_slot(date, entry.time, entry.duration_total)
            )
        except (ParseError, ValueError):
            logger.warning(
                "Skipping availability entry with bad time %r on %s", entry.time, date
            )
    return intervals


class AvailabilityIndex:
    """Booked intervals for a single date."""

    def __init__(self, date: str, intervals: Iterable[BookingInterval] = ()) -> None:
        self.date = date
        self._intervals = sorted(intervals, key=lambda i: (i.start_minutes, i.end_minutes))

    @classmethod
    async def build(cls, store: ReservationStorePort, date: str) -> "AvailabilityIndex":
        """Query the store for the date and index what it returns."""
        entries = await store.query_by_date(date)
        index = cls(date, intervals_from_entries(date, entries))
        logger.debug(
            "Built availability index for %s: %d of %d entries active",
            date, len(index), len(entries),
        )
        return index

    @property
    def intervals(self) -> list[BookingInterval]:
        return list(self._intervals)

    def __len__(self) -> int:
        return len(self._intervals)

    def conflicts(self, candidate: BookingInterval) -> list[BookingInterval]:
        """Indexed intervals that intersect the candidate."""
        return [existing for existing in self._intervals if candidate.overlaps(existing)]

    def overlaps(self, candidate: BookingInterval) -> bool:
        return any(candidate.overlaps(existing) for existing in self._intervals)
