"""
Collaborator interfaces injected into the engine.

In production these are backed by the document store, the admin
console's block feed, the service catalog and the mail relay. Every
call is async; implementations raise TransportError when the remote
side fails.
"""

from typing import AsyncIterator, Protocol

from booking_engine.schemas.booking_schema import AvailabilityProjection, ReservationRecord
from booking_engine.schemas.catalog_schema import BlockedDate, PackageDefinition
from booking_engine.schemas.notification_schema import BookingNotification


class CatalogPort(Protocol):
    async def list_packages(self) -> list[PackageDefinition]:
        """Return the current package catalog, possibly empty."""
        ...


class BlockFeedPort(Protocol):
    def subscribe(self) -> AsyncIterator[list[BlockedDate]]:
        """Yield the complete set of blocked dates each time it changes."""
        ...


class ReservationStorePort(Protocol):
    async def query_by_date(self, date: str) -> list[AvailabilityProjection]:
        """Return every availability entry for the date, whatever its status."""
        ...

    async def create_reservation(self, record: ReservationRecord) -> str:
        """Persist a full reservation and return its storage key."""
        ...

    async def create_projection(self, record_id: str, projection: AvailabilityProjection) -> None:
        """Persist the availability projection under the reservation's key."""
        ...


class NotifierPort(Protocol):
    async def send(self, notification: BookingNotification) -> None:
        ...
