"""Duplicate delivery filter — remembers recently processed message ids."""

from __future__ import annotations

import asyncio
import logging

logger = logging.getLogger(__name__)

# How often the whole set of seen ids is forgotten
DEDUP_CLEAR_INTERVAL_SECONDS = 60.0


class DedupFilter:
    """Coarse expiring set of inbound message ids.

    Ids are not expired one by one: the whole set is dropped every
    interval.  An id seen again after a clear is processed again.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def seen(self, message_id: str) -> bool:
        """Record *message_id*; return ``True`` if it was already recorded."""
        if message_id in self._seen:
            logger.debug("Duplicate delivery of %s ignored", message_id)
            return True
        self._seen.add(message_id)
        return False

    def clear(self) -> None:
        if self._seen:
            logger.debug("Forgetting %d processed message id(s)", len(self._seen))
        self._seen.clear()

    def __len__(self) -> int:
        return len(self._seen)

    async def run_clear_loop(
        self, interval: float = DEDUP_CLEAR_INTERVAL_SECONDS
    ) -> None:
        """Clear the set every *interval* seconds until cancelled."""
        while True:
            await asyncio.sleep(interval)
            self.clear()
