"""Reservation, projection and draft data models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ReservationStatus(str, Enum):
    """Lifecycle status of a reservation."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @property
    def holds_slot(self) -> bool:
        """Whether a reservation in this status blocks its interval."""
        return self not in (ReservationStatus.REJECTED, ReservationStatus.CANCELLED)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookingDraft(BaseModel):
    """Everything the customer chose before pressing submit."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    package_id: str = ""
    date: str = ""
    time: Optional[str] = None
    extension_minutes: int = 0
    notes: str = ""
    payment_proof_ref: Optional[str] = None


class ContactDetails(BaseModel):
    """Sanitized customer identity."""

    full_name: str
    email: str
    phone: str
    notes: str = ""


class ReservationRecord(BaseModel):
    """Full reservation document as persisted by the store."""

    reference: str
    full_name: str
    email: str
    phone: str
    package_id: str
    date: str
    time: str
    notes: str = ""
    extension_minutes: int = 0
    duration_total: int = Field(gt=0)
    total_price: int = Field(ge=0)
    downpayment: int = Field(ge=0)
    status: ReservationStatus = ReservationStatus.PENDING
    created_at: datetime = Field(default_factory=_utcnow)
    payment_proof_ref: Optional[str] = None

    def to_projection(self) -> "AvailabilityProjection":
        """Derive the lightweight availability record for this reservation."""
        return AvailabilityProjection(
            date=self.date,
            time=self.time,
            duration_total=self.duration_total,
            status=self.status,
            created_at=self.created_at,
        )


class AvailabilityProjection(BaseModel):
    """Lightweight copy of a reservation used for overlap queries."""

    date: str
    time: Optional[str] = None
    duration_total: int = 0
    status: ReservationStatus = ReservationStatus.PENDING
    created_at: Optional[datetime] = None
