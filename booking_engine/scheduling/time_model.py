"""Clock-time and calendar-date conversions used across scheduling."""

import re
from datetime import date, datetime, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from booking_engine.errors import ParseError

MINUTES_PER_DAY = 24 * 60

_CLOCK_RE = re.compile(r"([0-9]{2}):([0-9]{2})")
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

Clock = Callable[[], datetime]


def utc_clock() -> datetime:
    return datetime.now(timezone.utc)


def to_minutes(clock_time: str) -> int:
    """Convert ``HH:MM`` (24h) to minutes past midnight.

    Raises:
        ParseError: If the value is not two-digit hour and minute in range.
    """
    match = _CLOCK_RE.fullmatch(clock_time) if isinstance(clock_time, str) else None
    if not match:
        raise ParseError(f"Invalid clock time: {clock_time!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ParseError(f"Clock time out of range: {clock_time!r}")
    return hours * 60 + minutes


def minutes_to_clock(minutes: int) -> str:
    """Inverse of to_minutes for offsets within one day."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ParseError(f"Minute offset out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_clock_12h(clock_time: str) -> str:
    """Render ``HH:MM`` as ``H:MM AM/PM``.

    Examples:
        >>> format_clock_12h("14:30")
        '2:30 PM'
        >>> format_clock_12h("00:15")
        '12:15 AM'
    """
    total = to_minutes(clock_time)
    hour, minute = divmod(total, 60)
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` calendar date."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise ParseError(f"Invalid date: {value!r}")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ParseError(f"Invalid date: {value!r}") from None


def business_now(timezone_name: str, clock: Optional[Clock] = None) -> datetime:
    """Current time in the business timezone, whatever the host's zone is."""
    now = (clock or utc_clock)()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(ZoneInfo(timezone_name))
