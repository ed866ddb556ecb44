"""Input sanitization shared by validation and record building."""

import re
from typing import Any, Optional

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
}
_TAG_RE = re.compile(r"<[^>]*>")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MAX_EMAIL_LENGTH = 254
NAME_PUNCTUATION = " '-"


def normalize_phone(value: str) -> str:
    """Normalize a phone number by stripping everything except digits and a leading +.

    Examples:
        >>> normalize_phone("0912 345 6789")
        '09123456789'
        >>> normalize_phone("+63 (912) 345-6789")
        '+639123456789'
    """
    value = value.strip()
    if value.startswith("+"):
        return "+" + re.sub(r"[^\d]", "", value[1:])
    return re.sub(r"[^\d]", "", value)


def sanitize_string(value: Any) -> str:
    """HTML-escape a string. Non-string input yields an empty string."""
    if not isinstance(value, str):
        return ""
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in value)


def sanitize_email(value: Any) -> Optional[str]:
    """Lowercase and trim an email address, or None if it is not plausible."""
    if not isinstance(value, str):
        return None
    email = value.strip().lower()
    if len(email) > MAX_EMAIL_LENGTH or not _EMAIL_RE.match(email):
        return None
    return email


def sanitize_phone_number(value: Any) -> Optional[str]:
    """Normalize a Philippine mobile number to +639XXXXXXXXX, or None.

    Accepts 09XXXXXXXXX, 639XXXXXXXXX and +639XXXXXXXXX with any spacing
    or punctuation between the digits.
    """
    if not isinstance(value, str) or re.search(r"[A-Za-z]", value):
        return None
    phone = normalize_phone(value)
    if re.fullmatch(r"09\d{9}", phone):
        return "+63" + phone[1:]
    if re.fullmatch(r"639\d{9}", phone):
        return "+" + phone
    if re.fullmatch(r"\+639\d{9}", phone):
        return phone
    return None


def sanitize_name(value: Any, max_length: int = 100) -> str:
    """Keep letters, spaces, apostrophes and hyphens; collapse whitespace."""
    if not isinstance(value, str):
        return ""
    stripped = _TAG_RE.sub("", value)
    kept = "".join(ch for ch in stripped if ch.isalpha() or ch in NAME_PUNCTUATION)
    return " ".join(kept.split())[:max_length].strip()


def sanitize_text(value: Any, max_length: int = 500) -> str:
    """Strip HTML tags, truncate, then escape what remains."""
    if not isinstance(value, str):
        return ""
    stripped = _TAG_RE.sub("", value).strip()
    return sanitize_string(stripped[:max_length])
