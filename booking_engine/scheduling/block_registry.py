"""Dates an operator has closed, kept in sync with the admin block feed."""

import logging
from typing import Iterable, Optional

from booking_engine.errors import TransportError
from booking_engine.ports import BlockFeedPort
from booking_engine.schemas.catalog_schema import BlockedDate

logger = logging.getLogger(__name__)


class AdminBlockRegistry:
    """
    Live mapping of blocked date -> reason.

    Each snapshot delivered by the feed is authoritative and replaces the
    whole mapping; there is no incremental add/remove.
    """

    def __init__(self, blocks: Iterable[BlockedDate] = ()) -> None:
        self._blocks: dict[str, str] = {}
        self.apply_snapshot(blocks)

    def apply_snapshot(self, blocks: Iterable[BlockedDate]) -> None:
        self._blocks = {block.date: block.reason or "Unavailable" for block in blocks}
        logger.debug("Block registry replaced: %d blocked dates", len(self._blocks))

    def is_blocked(self, date: str) -> bool:
        return date in self._blocks

    def reason_for(self, date: str) -> Optional[str]:
        return self._blocks.get(date)

    def blocked_dates(self) -> list[str]:
        return sorted(self._blocks)

    async def follow(self, feed: BlockFeedPort) -> None:
        """Apply feed snapshots until the feed ends.

        A transport failure stops the subscription; the last snapshot
        received stays in effect.
        """
        try:
            async for snapshot in feed.subscribe():
                self.apply_snapshot(snapshot)
        except TransportError:
            logger.error(
                "Block feed failed, keeping last snapshot of %d dates",
                len(self._blocks),
                exc_info=True,
            )
