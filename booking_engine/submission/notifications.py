"""Notification payloads and user-facing messages for submission outcomes."""

from booking_engine.schemas.booking_schema import ReservationRecord
from booking_engine.schemas.catalog_schema import PackageDefinition
from booking_engine.schemas.notification_schema import BookingNotification
from booking_engine.scheduling.time_model import format_clock_12h

CONFLICT_MESSAGE = "This slot was just booked by someone else! Please choose another time."
INVALID_MESSAGE = "Invalid form data. Please check your {fields}."
FAILURE_MESSAGE = "Something went wrong. Please try again."


def build_received_notification(
    record: ReservationRecord, package: PackageDefinition
) -> BookingNotification:
    """Build the booking-received notice sent after a commit."""
    return BookingNotification(
        reference_number=record.reference,
        name=record.full_name,
        email=record.email,
        phone=record.phone,
        package=package.name or record.package_id,
        total_amount=record.total_price,
        downpayment=record.downpayment,
        date=record.date,
        time_start=format_clock_12h(record.time),
    )


def build_committed_message(record: ReservationRecord) -> str:
    return (
        f"Booking received. Reference number: {record.reference}. "
        f"{record.date} at {format_clock_12h(record.time)}, "
        f"downpayment due: {record.downpayment}."
    )
