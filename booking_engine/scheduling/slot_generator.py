"""Candidate start times for a date from weekday/weekend business hours."""

import logging
from datetime import date
from typing import Optional, Union

from booking_engine.config import BusinessConfig, settings
from booking_engine.scheduling.time_model import minutes_to_clock, parse_date

logger = logging.getLogger(__name__)

SATURDAY = 5


def business_hours(day: date, config: Optional[BusinessConfig] = None) -> tuple[int, int]:
    """Return (open_hour, close_hour) for a date; close hour is exclusive."""
    config = config or settings.business
    if day.weekday() >= SATURDAY:
        return config.weekend_open_hour, config.weekend_close_hour
    return config.weekday_open_hour, config.weekday_close_hour


def generate_time_slots(
    day: Union[str, date, None], config: Optional[BusinessConfig] = None
) -> list[str]:
    """Ordered ``HH:MM`` start times covering [open:00, close:00) for a date.

    Returns an empty list when no date is supplied.
    """
    if not day:
        return []
    config = config or settings.business
    if isinstance(day, str):
        day = parse_date(day)

    open_hour, close_hour = business_hours(day, config)
    step = config.slot_step_minutes
    slots = [
        minutes_to_clock(minute)
        for minute in range(open_hour * 60, close_hour * 60, step)
    ]
    logger.debug("Generated %d slots for %s", len(slots), day.isoformat())
    return slots
