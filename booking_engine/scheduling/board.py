"""
Slot board for the booking form's time grid.

Holds the availability index for the currently selected date and renders
every generated slot as available, selected or booked. The board is a UX
hint only; the submission protocol re-validates against fresh state.

Usage:
    board = SlotBoard(store, registry)
    await board.select_date("2025-12-20")
    for view in board.slots(duration_total=45, selected_time="13:00"):
        print(view.slot.time, view.status.value)
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from booking_engine.config import BusinessConfig, settings
from booking_engine.errors import ParseError
from booking_engine.ports import ReservationStorePort
from booking_engine.scheduling.availability import AvailabilityIndex
from booking_engine.scheduling.block_registry import AdminBlockRegistry
from booking_engine.scheduling.eligibility import EligibilityPipeline
from booking_engine.scheduling.intervals import TimeSlot
from booking_engine.scheduling.slot_generator import generate_time_slots
from booking_engine.scheduling.time_model import Clock, business_now, parse_date

logger = logging.getLogger(__name__)


class SlotStatus(str, Enum):
    """Legend shown on the time grid."""

    AVAILABLE = "available"
    SELECTED = "selected"
    BOOKED = "booked"


@dataclass(frozen=True)
class SlotView:
    """One rendered cell of the time grid."""
    slot: TimeSlot
    status: SlotStatus
    reason: Optional[str] = None

    @property
    def selectable(self) -> bool:
        return self.status != SlotStatus.BOOKED


class SlotBoard:
    """Per-date availability view, rebuilt from the store on every date change."""

    def __init__(
        self,
        store: ReservationStorePort,
        registry: Optional[AdminBlockRegistry] = None,
        config: Optional[BusinessConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._store = store
        self._registry = registry or AdminBlockRegistry()
        self._config = config or settings.business
        self._clock = clock
        self._date: Optional[str] = None
        self._index: Optional[AvailabilityIndex] = None

    @property
    def selected_date(self) -> Optional[str]:
        return self._date

    @property
    def index(self) -> Optional[AvailabilityIndex]:
        return self._index

    def now(self) -> datetime:
        return business_now(self._config.timezone, self._clock)

    def is_date_selectable(self, date: str) -> bool:
        """Blocked dates and dates before business-today cannot be picked."""
        if self._registry.is_blocked(date):
            return False
        try:
            return parse_date(date) >= self.now().date()
        except ParseError:
            return False

    async def select_date(self, date: str) -> AvailabilityIndex:
        """Select a date and rebuild its index with a fresh store query.

        If the query fails the previous selection stays in place.
        """
        index = await AvailabilityIndex.build(self._store, date)
        self._date = date
        self._index = index
        logger.info("Loaded %d booked intervals for %s", len(self._index), date)
        return self._index

    def slots(self, duration_total: int, selected_time: Optional[str] = None) -> list[SlotView]:
        """Render every generated slot for the selected date; none are omitted."""
        if not self._date:
            return []
        pipeline = EligibilityPipeline(
            self._registry, self._index, duration_total, self.now()
        )
        views: list[SlotView] = []
        for clock_time in generate_time_slots(self._date, self._config):
            slot = TimeSlot(date=self._date, time=clock_time)
            result = pipeline.check(slot)
            if not result.eligible:
                views.append(SlotView(slot, SlotStatus.BOOKED, result.reason))
            elif clock_time == selected_time:
                views.append(SlotView(slot, SlotStatus.SELECTED))
            else:
                views.append(SlotView(slot, SlotStatus.AVAILABLE))
        return views
