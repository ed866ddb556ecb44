from booking_engine.scheduling.availability import AvailabilityIndex
from booking_engine.scheduling.block_registry import AdminBlockRegistry
from booking_engine.scheduling.board import SlotBoard, SlotStatus, SlotView
from booking_engine.scheduling.eligibility import EligibilityResult, check_slot_eligibility
from booking_engine.scheduling.intervals import BookingInterval, TimeSlot, overlaps
from booking_engine.scheduling.slot_generator import generate_time_slots
from booking_engine.scheduling.time_model import format_clock_12h, to_minutes

__all__ = [
    "AvailabilityIndex",
    "AdminBlockRegistry",
    "SlotBoard",
    "SlotStatus",
    "SlotView",
    "EligibilityResult",
    "check_slot_eligibility",
    "BookingInterval",
    "TimeSlot",
    "overlaps",
    "generate_time_slots",
    "format_clock_12h",
    "to_minutes",
]
