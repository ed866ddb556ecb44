"""Tests for the in-memory collaborators."""

import pytest

from booking_engine.adapters.memory import InMemoryReservationStore, RecordingNotifier
from booking_engine.errors import ConflictError, TransportError
from booking_engine.schemas.booking_schema import ReservationRecord, ReservationStatus
from booking_engine.schemas.notification_schema import BookingNotification
from tests.conftest import SATURDAY


def _record(time: str, duration: int = 45) -> ReservationRecord:
    return ReservationRecord(
        reference="IOS-251219-ABCD",
        full_name="Maria Santos",
        email="maria@example.com",
        phone="+639171234567",
        package_id="standard",
        date=SATURDAY,
        time=time,
        duration_total=duration,
        total_price=699,
        downpayment=350,
    )


class TestReservationStore:
    @pytest.mark.asyncio
    async def test_record_and_projection_kept_separately(self, store):
        record = _record("13:00")
        record_id = await store.create_reservation(record)
        assert await store.query_by_date(SATURDAY) == []
        await store.create_projection(record_id, record.to_projection())
        entries = await store.query_by_date(SATURDAY)
        assert [e.time for e in entries] == ["13:00"]

    @pytest.mark.asyncio
    async def test_set_status_updates_both(self, store):
        record = _record("13:00")
        record_id = await store.create_reservation(record)
        await store.create_projection(record_id, record.to_projection())
        store.set_status(record_id, ReservationStatus.CONFIRMED)
        assert store.records[record_id].status == ReservationStatus.CONFIRMED
        assert store.projections[record_id].status == ReservationStatus.CONFIRMED

    def test_set_status_unknown_record(self, store):
        with pytest.raises(KeyError):
            store.set_status("missing", ReservationStatus.CANCELLED)

    @pytest.mark.asyncio
    async def test_fail_on(self):
        store = InMemoryReservationStore(fail_on=["query_by_date"])
        with pytest.raises(TransportError):
            await store.query_by_date(SATURDAY)

    @pytest.mark.asyncio
    async def test_enforced_constraint_refuses_overlap(self):
        store = InMemoryReservationStore(enforce_no_overlap=True)
        await store.create_reservation(_record("13:00"))
        with pytest.raises(ConflictError):
            await store.create_reservation(_record("13:30"))
        await store.create_reservation(_record("13:45"))
        assert len(store.active_records(SATURDAY)) == 2


class TestRecordingNotifier:
    @pytest.mark.asyncio
    async def test_failure_raises(self):
        notice = BookingNotification(
            reference_number="IOS-251219-ABCD", name="Maria Santos", email="m@example.com",
            phone="+639171234567", package="Standard Package", total_amount=699,
            downpayment=350, date=SATURDAY, time_start="1:00 PM",
        )
        with pytest.raises(ConnectionError):
            await RecordingNotifier(fail=True).send(notice)
