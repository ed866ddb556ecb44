"""
Centralized configuration with environment variable overrides.

Business hours, the business timezone, slot grid, reference prefix and
downpayment rate live here. Nothing is hardcoded in scheduling or
submission logic.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional, TextIO
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from booking_engine.logging_context import AttemptIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

SUPPORTED_SLOT_STEPS = (15, 30)
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s [%(attempt_id)s]: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class BusinessConfig:
    """Business-specific settings loaded from environment or defaults."""

    name: str = os.getenv("BUSINESS_NAME", "IOS Studio")
    timezone: str = os.getenv("BUSINESS_TIMEZONE", "Asia/Manila")
    weekday_open_hour: int = _safe_int("WEEKDAY_OPEN_HOUR", "10")
    weekday_close_hour: int = _safe_int("WEEKDAY_CLOSE_HOUR", "19")
    weekend_open_hour: int = _safe_int("WEEKEND_OPEN_HOUR", "9")
    weekend_close_hour: int = _safe_int("WEEKEND_CLOSE_HOUR", "20")
    slot_step_minutes: int = _safe_int("SLOT_STEP_MINUTES", "30")
    reference_prefix: str = os.getenv("REFERENCE_PREFIX", "IOS")
    downpayment_percent: int = _safe_int("DOWNPAYMENT_PERCENT", "50")


@dataclass(frozen=True)
class SubmissionConfig:
    """Limits applied when sanitizing customer input at submit time."""

    name_max_length: int = _safe_int("NAME_MAX_LENGTH", "100")
    notes_max_length: int = _safe_int("NOTES_MAX_LENGTH", "500")
    min_name_length: int = _safe_int("MIN_NAME_LENGTH", "2")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    submission: SubmissionConfig = field(default_factory=SubmissionConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    business = config.business
    try:
        ZoneInfo(business.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(
            f"BUSINESS_TIMEZONE is not a known timezone: {business.timezone!r}"
        ) from None

    for label, open_hour, close_hour in [
        ("WEEKDAY", business.weekday_open_hour, business.weekday_close_hour),
        ("WEEKEND", business.weekend_open_hour, business.weekend_close_hour),
    ]:
        if not 0 <= open_hour <= 23:
            raise ValueError(f"{label}_OPEN_HOUR must be between 0 and 23, got {open_hour}")
        if not 1 <= close_hour <= 24:
            raise ValueError(f"{label}_CLOSE_HOUR must be between 1 and 24, got {close_hour}")
        if open_hour >= close_hour:
            raise ValueError(
                f"{label}_OPEN_HOUR ({open_hour}) must be before {label}_CLOSE_HOUR ({close_hour})"
            )

    if business.slot_step_minutes not in SUPPORTED_SLOT_STEPS:
        raise ValueError(
            f"SLOT_STEP_MINUTES must be one of {SUPPORTED_SLOT_STEPS}, "
            f"got {business.slot_step_minutes}"
        )
    if not 0 <= business.downpayment_percent <= 100:
        raise ValueError(
            f"DOWNPAYMENT_PERCENT must be between 0 and 100, got {business.downpayment_percent}"
        )
    if not business.reference_prefix.isalnum() or not business.reference_prefix.isupper():
        raise ValueError(
            f"REFERENCE_PREFIX must be uppercase alphanumeric, got {business.reference_prefix!r}"
        )

    if config.submission.min_name_length < 1:
        raise ValueError(
            f"MIN_NAME_LENGTH must be >= 1, got {config.submission.min_name_length}"
        )
    if config.submission.name_max_length < config.submission.min_name_length:
        raise ValueError(
            "NAME_MAX_LENGTH must be >= MIN_NAME_LENGTH, "
            f"got {config.submission.name_max_length}"
        )
    if config.submission.notes_max_length < 0:
        raise ValueError(
            f"NOTES_MAX_LENGTH must be >= 0, got {config.submission.notes_max_length}"
        )


def build_log_handler(stream: Optional[TextIO] = None) -> logging.Handler:
    """Stream handler whose records always carry an attempt_id."""
    handler = logging.StreamHandler(stream)
    handler.addFilter(AttemptIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATEFMT))
    return handler


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[build_log_handler()],
    )
    logger.info(
        "Configuration loaded for '%s' (%s)", config.business.name, config.business.timezone
    )
    return config


# Singleton instance
settings = load_config()
