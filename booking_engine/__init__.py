"""Slot availability and double-booking prevention for a single-location studio."""

__version__ = "0.1.0"
