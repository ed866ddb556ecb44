"""Correlation ID logging context for tracing one booking attempt.

Provides an attempt_id-aware logger that attaches a correlation ID to every
log message, so the re-validation query, both commit writes and the
notification of a single submission can be read together.

Usage:
    from booking_engine.logging_context import get_attempt_logger, set_attempt_id

    set_attempt_id("ATT-3f9a2c")
    logger = get_attempt_logger(__name__)
    logger.info("Re-validating slot")  # record.attempt_id == "ATT-3f9a2c"
"""

import logging
from contextvars import ContextVar

_attempt_id: ContextVar[str] = ContextVar("attempt_id", default="NO_ATTEMPT_ID")


def set_attempt_id(attempt_id: str) -> None:
    """Set the correlation ID for the current async context."""
    _attempt_id.set(attempt_id)


def get_attempt_id() -> str:
    """Retrieve the current correlation ID."""
    return _attempt_id.get()


class AttemptIdFilter(logging.Filter):
    """Injects attempt_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.attempt_id = _attempt_id.get()  # type: ignore[attr-defined]
        return True


def get_attempt_logger(name: str) -> logging.Logger:
    """Return a logger with the AttemptIdFilter attached.

    The filter adds ``attempt_id`` to each record so formatters can
    include ``%(attempt_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, AttemptIdFilter) for f in logger.filters):
        logger.addFilter(AttemptIdFilter())
    return logger
