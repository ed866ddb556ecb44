"""Payload handed to the notification collaborator after a commit."""

from pydantic import BaseModel


class BookingNotification(BaseModel):
    """Booking-received notice with reference, contact and price fields."""

    type: str = "received"
    reference_number: str
    name: str
    email: str
    phone: str
    package: str
    total_amount: int
    downpayment: int
    date: str
    time_start: str
