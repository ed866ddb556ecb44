"""
Draft validation: sanitize contact fields and resolve the chosen package.

Each contact field has a definition with a sanitizer; a sanitizer that
returns an empty value marks the field invalid. All failing fields are
reported together so the form can highlight them in one pass.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from booking_engine.catalog import EXTENSION_RATES, PackageCatalog, quote
from booking_engine.config import SubmissionConfig, settings
from booking_engine.errors import ParseError, ValidationError
from booking_engine.schemas.booking_schema import BookingDraft, ContactDetails
from booking_engine.schemas.catalog_schema import PackageDefinition, PriceQuote
from booking_engine.scheduling.intervals import TimeSlot
from booking_engine.scheduling.time_model import parse_date, to_minutes
from booking_engine.utils import (
    sanitize_email,
    sanitize_name,
    sanitize_phone_number,
    sanitize_text,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldDefinition:
    """Schema for a single required contact field."""

    name: str
    display_name: str
    sanitizer: Callable[[str, SubmissionConfig], Optional[str]]


def _clean_name(value: str, config: SubmissionConfig) -> Optional[str]:
    name = sanitize_name(value, config.name_max_length)
    return name if len(name) >= config.min_name_length else None


def _clean_email(value: str, config: SubmissionConfig) -> Optional[str]:
    return sanitize_email(value)


def _clean_phone(value: str, config: SubmissionConfig) -> Optional[str]:
    return sanitize_phone_number(value)


CONTACT_FIELDS: list[FieldDefinition] = [
    FieldDefinition(name="full_name", display_name="full name", sanitizer=_clean_name),
    FieldDefinition(name="email", display_name="email address", sanitizer=_clean_email),
    FieldDefinition(name="phone", display_name="phone number", sanitizer=_clean_phone),
]


@dataclass(frozen=True)
class ValidatedBooking:
    """A draft that passed validation, ready for the conflict check."""

    contact: ContactDetails
    package: PackageDefinition
    quote: PriceQuote
    slot: TimeSlot


def validate_contact(
    draft: BookingDraft, config: Optional[SubmissionConfig] = None
) -> tuple[Optional[ContactDetails], list[str]]:
    """Sanitize the contact fields.

    Returns:
        (contact, invalid_fields); contact is None if any field failed.
    """
    config = config or settings.submission
    cleaned: dict[str, str] = {}
    invalid: list[str] = []
    for defn in CONTACT_FIELDS:
        value = defn.sanitizer(getattr(draft, defn.name), config)
        if value:
            cleaned[defn.name] = value
        else:
            invalid.append(defn.name)
            logger.debug("Field '%s' failed validation", defn.name)
    if invalid:
        return None, invalid
    notes = sanitize_text(draft.notes, config.notes_max_length)
    return ContactDetails(notes=notes, **cleaned), []


def validate_draft(
    draft: BookingDraft,
    catalog: PackageCatalog,
    config: Optional[SubmissionConfig] = None,
) -> ValidatedBooking:
    """Validate every part of a draft that can be checked without the store.

    Raises:
        ValidationError: Listing every invalid field.
    """
    contact, invalid = validate_contact(draft, config)

    package = catalog.get(draft.package_id)
    if package is None:
        invalid.append("package_id")
    if draft.extension_minutes not in EXTENSION_RATES:
        invalid.append("extension_minutes")

    try:
        parse_date(draft.date)
    except ParseError:
        invalid.append("date")
    if not draft.time:
        invalid.append("time")
    else:
        try:
            to_minutes(draft.time)
        except ParseError:
            invalid.append("time")

    if invalid or contact is None or package is None or not draft.time:
        raise ValidationError(invalid)

    price = quote(package, draft.extension_minutes)
    if price.duration_total <= 0:
        raise ValidationError(["package_id"], "Selected package has no duration")
    return ValidatedBooking(
        contact=contact,
        package=package,
        quote=price,
        slot=TimeSlot(date=draft.date, time=draft.time),
    )


_DISPLAY_NAMES = {defn.name: defn.display_name for defn in CONTACT_FIELDS}
_DISPLAY_NAMES.update(
    package_id="package",
    extension_minutes="extension",
    date="date",
    time="time slot",
)


def describe_fields(fields: list[str]) -> str:
    """Human-readable list of invalid fields for the inline error."""
    return ", ".join(_DISPLAY_NAMES.get(name, name.replace("_", " ")) for name in fields)
