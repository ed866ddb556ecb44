"""Human-facing booking reference codes: PREFIX-YYMMDD-XXXX.

The code is a label for customers and staff; the store's document key is
the real identifier, so an occasional same-day collision is tolerated.
"""

import re
import secrets
from datetime import date
from typing import Optional

from booking_engine.config import settings
from booking_engine.scheduling.time_model import business_now

# 0, O, 1 and I are left out so codes survive being read aloud or handwritten.
REFERENCE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
SUFFIX_LENGTH = 4


def generate_booking_reference(
    prefix: Optional[str] = None, today: Optional[date] = None
) -> str:
    """Generate a reference such as ``IOS-251220-A3F7``.

    ``today`` defaults to the current date in the business timezone.
    """
    prefix = prefix or settings.business.reference_prefix
    today = today or business_now(settings.business.timezone).date()
    suffix = "".join(secrets.choice(REFERENCE_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{prefix}-{today:%y%m%d}-{suffix}"


def is_valid_reference(ref: str, prefix: Optional[str] = None) -> bool:
    """Check that a string has the reference shape for the given prefix."""
    prefix = prefix or settings.business.reference_prefix
    pattern = rf"^{re.escape(prefix)}-\d{{6}}-[A-Z0-9]{{{SUFFIX_LENGTH}}}$"
    return isinstance(ref, str) and re.fullmatch(pattern, ref) is not None
