"""
Error taxonomy for the booking engine.

ParseError: malformed time/date string (programming or catalog defect)
ValidationError: missing or malformed customer field, no write occurs
ConflictError: requested interval overlaps an active reservation
TransportError: a collaborator call failed (store, catalog, feed)
PartialCommitError: reservation written but its projection was not
"""

from typing import Iterable, Optional


class BookingError(Exception):
    """Base class for all booking engine errors."""


class ParseError(BookingError, ValueError):
    """Raised when a clock time or calendar date cannot be parsed."""


class ValidationError(BookingError):
    """Raised when user-supplied fields fail validation or sanitization."""

    def __init__(self, fields: Iterable[str], message: Optional[str] = None) -> None:
        self.fields = list(fields)
        super().__init__(message or f"Invalid fields: {', '.join(self.fields)}")


class ConflictError(BookingError):
    """Raised when the proposed interval overlaps an existing reservation."""

    def __init__(self, date: str, time: str, message: Optional[str] = None) -> None:
        self.date = date
        self.time = time
        super().__init__(message or f"Slot {date} {time} overlaps an existing reservation")


class TransportError(BookingError):
    """Raised by collaborators when a remote call fails."""


class PartialCommitError(BookingError):
    """Raised when the reservation exists but its availability projection does not."""

    def __init__(self, record_id: str, reference: str) -> None:
        self.record_id = record_id
        self.reference = reference
        super().__init__(
            f"Reservation {reference} ({record_id}) written without its availability projection"
        )
