"""
In-memory collaborators for tests and the console demo.

In production these ports are backed by the hosted document store
(`bookings` and `booked_slots` collections), the admin console's
`unavailableDates` listener, the services collection and the mail relay.

Every call awaits ``latency`` seconds before touching state, so two
concurrent submissions interleave the way they do against a remote
store. Operations named in ``fail_on`` raise TransportError.
"""

import asyncio
import logging
import uuid
from typing import AsyncIterator, Iterable, Optional

from booking_engine.errors import ConflictError, TransportError
from booking_engine.schemas.booking_schema import (
    AvailabilityProjection,
    ReservationRecord,
    ReservationStatus,
)
from booking_engine.schemas.catalog_schema import BlockedDate, PackageDefinition
from booking_engine.schemas.notification_schema import BookingNotification
from booking_engine.scheduling.intervals import BookingInterval

logger = logging.getLogger(__name__)


class InMemoryReservationStore:
    """
    Reservation store with records and projections kept side by side.

    With ``enforce_no_overlap=True`` the store behaves like a backend with a
    uniqueness constraint on booked ranges: create_reservation atomically
    refuses a record that overlaps an active one on the same date.
    """

    def __init__(
        self,
        latency: float = 0.0,
        enforce_no_overlap: bool = False,
        fail_on: Iterable[str] = (),
    ) -> None:
        self.latency = latency
        self.enforce_no_overlap = enforce_no_overlap
        self.fail_on = set(fail_on)
        self.records: dict[str, ReservationRecord] = {}
        self.projections: dict[str, AvailabilityProjection] = {}
        self.query_count = 0
        self._write_lock = asyncio.Lock()

    async def _round_trip(self, operation: str) -> None:
        await asyncio.sleep(self.latency)
        if operation in self.fail_on:
            raise TransportError(f"{operation} failed: store unavailable")

    async def query_by_date(self, date: str) -> list[AvailabilityProjection]:
        self.query_count += 1
        await self._round_trip("query_by_date")
        return [p.model_copy() for p in self.projections.values() if p.date == date]

    async def create_reservation(self, record: ReservationRecord) -> str:
        await self._round_trip("create_reservation")
        async with self._write_lock:
            if self.enforce_no_overlap:
                self._check_no_overlap(record)
            record_id = uuid.uuid4().hex
            self.records[record_id] = record.model_copy()
        logger.debug("Reservation stored: %s -> %s", record.reference, record_id)
        return record_id

    async def create_projection(
        self, record_id: str, projection: AvailabilityProjection
    ) -> None:
        await self._round_trip("create_projection")
        self.projections[record_id] = projection.model_copy()

    def _check_no_overlap(self, record: ReservationRecord) -> None:
        candidate = BookingInterval.from_slot(record.date, record.time, record.duration_total)
        for existing in self.records.values():
            if existing.date != record.date or not existing.status.holds_slot:
                continue
            interval = BookingInterval.from_slot(
                existing.date, existing.time, existing.duration_total
            )
            if candidate.overlaps(interval):
                raise ConflictError(record.date, record.time)

    def set_status(self, record_id: str, status: ReservationStatus) -> None:
        """Admin-side status change; updates the record and its projection together."""
        if record_id not in self.records:
            raise KeyError(f"Reservation {record_id} not found")
        self.records[record_id] = self.records[record_id].model_copy(update={"status": status})
        if record_id in self.projections:
            self.projections[record_id] = self.projections[record_id].model_copy(
                update={"status": status}
            )
        logger.info("Reservation %s moved to %s", record_id, status.value)

    def active_records(self, date: str) -> list[ReservationRecord]:
        return [r for r in self.records.values() if r.date == date and r.status.holds_slot]


class StaticCatalogSource:
    """Catalog collaborator returning a fixed package list."""

    def __init__(
        self, packages: Iterable[PackageDefinition] = (), fail: bool = False
    ) -> None:
        self.packages = list(packages)
        self.fail = fail

    async def list_packages(self) -> list[PackageDefinition]:
        if self.fail:
            raise TransportError("catalog unavailable")
        return list(self.packages)


class QueueBlockFeed:
    """Push feed driven by the test: publish() delivers a full snapshot."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Optional[list[BlockedDate]]] = asyncio.Queue()
        self._error: Optional[TransportError] = None

    def publish(self, blocks: Iterable[BlockedDate]) -> None:
        self._queue.put_nowait(list(blocks))

    def fail(self, message: str = "feed disconnected") -> None:
        self._error = TransportError(message)
        self._queue.put_nowait(None)

    def close(self) -> None:
        self._queue.put_nowait(None)

    async def subscribe(self) -> AsyncIterator[list[BlockedDate]]:
        while True:
            snapshot = await self._queue.get()
            if snapshot is None:
                if self._error is not None:
                    raise self._error
                return
            yield snapshot


class RecordingNotifier:
    """Notifier that keeps every notification it was asked to send."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[BookingNotification] = []
        self.fail = fail

    async def send(self, notification: BookingNotification) -> None:
        if self.fail:
            raise ConnectionError("mail relay unreachable")
        self.sent.append(notification)
