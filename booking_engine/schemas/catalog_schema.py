"""Catalog and admin block data models."""

from pydantic import BaseModel, Field


class PackageDefinition(BaseModel):
    """Bookable package from the service catalog."""

    id: str
    name: str
    price: int = Field(ge=0)
    duration_minutes: int = Field(ge=0)


class BlockedDate(BaseModel):
    """A date an operator has closed for bookings."""

    date: str
    reason: str = "Unavailable"


class PriceQuote(BaseModel):
    """Price and duration computed for a package plus extension."""

    package_id: str
    base_price: int
    extension_price: int
    total_price: int
    downpayment: int
    duration_total: int
