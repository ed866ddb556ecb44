"""Shared test fixtures and helpers."""

from datetime import datetime, timezone

import pytest

from booking_engine.adapters.memory import InMemoryReservationStore, RecordingNotifier
from booking_engine.catalog import PackageCatalog
from booking_engine.schemas.booking_schema import (
    AvailabilityProjection,
    BookingDraft,
    ReservationStatus,
)
from booking_engine.scheduling.block_registry import AdminBlockRegistry
from booking_engine.submission.protocol import BookingSubmission

# Friday 2025-12-19 14:05 in Asia/Manila (UTC+8)
FIXED_NOW_UTC = datetime(2025, 12, 19, 6, 5, tzinfo=timezone.utc)
TODAY = "2025-12-19"
SATURDAY = "2025-12-20"
TUESDAY = "2025-12-23"


def fixed_clock() -> datetime:
    return FIXED_NOW_UTC


@pytest.fixture
def store():
    return InMemoryReservationStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def registry():
    return AdminBlockRegistry()


@pytest.fixture
def catalog():
    return PackageCatalog()


@pytest.fixture
def submission(store, catalog, notifier, registry):
    return BookingSubmission(store, catalog, notifier, registry, clock=fixed_clock)


def make_draft(
    date: str = SATURDAY,
    time: str = "13:00",
    package_id: str = "standard",
    extension_minutes: int = 0,
    **overrides,
) -> BookingDraft:
    """Helper to create a BookingDraft with valid contact details."""
    fields = {
        "full_name": "Maria Santos",
        "email": "maria@example.com",
        "phone": "0917 123 4567",
        "package_id": package_id,
        "date": date,
        "time": time,
        "extension_minutes": extension_minutes,
        "notes": "",
    }
    fields.update(overrides)
    return BookingDraft(**fields)


def make_projection(
    time: str,
    duration_total: int,
    date: str = SATURDAY,
    status: ReservationStatus = ReservationStatus.PENDING,
) -> AvailabilityProjection:
    return AvailabilityProjection(
        date=date, time=time, duration_total=duration_total, status=status
    )
