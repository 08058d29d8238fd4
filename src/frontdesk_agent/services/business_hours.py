"""Business-hours gate — decides whether the automated flow may engage."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

_DAY_NAMES = ("segunda", "terça", "quarta", "quinta", "sexta", "sábado", "domingo")


class GateDecision(str, Enum):
    OPEN = "open"
    NOTIFY = "notify"  # closed, first message of this closed period
    SUPPRESS = "suppress"  # closed, customer already told


class BusinessHoursGate:
    """Weekly opening schedule plus the set of chats already told we're closed.

    Parameters
    ----------
    start_hour, end_hour:
        Opening hour (inclusive) and closing hour (exclusive), local time.
    weekdays:
        Open days as ``datetime.weekday()`` numbers (Monday = 0).
    timezone:
        IANA zone the schedule is expressed in.
    """

    def __init__(
        self,
        start_hour: int = 9,
        end_hour: int = 18,
        weekdays: Iterable[int] = (0, 1, 2, 3, 4),
        timezone: str = "America/Sao_Paulo",
    ) -> None:
        if not 0 <= start_hour < end_hour <= 24:
            raise ValueError(f"Invalid opening hours: {start_hour}-{end_hour}")
        self.start_hour = start_hour
        self.end_hour = end_hour
        self.weekdays = frozenset(weekdays)
        self.tz = ZoneInfo(timezone)
        self._notified: set[str] = set()

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def is_open(self, now: datetime) -> bool:
        """Return ``True`` if *now* falls inside the schedule.

        Naive datetimes are taken as already being in the schedule's zone.
        """
        local = now.astimezone(self.tz) if now.tzinfo else now
        return (
            local.weekday() in self.weekdays
            and self.start_hour <= local.hour < self.end_hour
        )

    def check(self, conversation_id: str, now: datetime) -> GateDecision:
        """Decide what to do with a customer message arriving at *now*."""
        if self.is_open(now):
            self._notified.discard(conversation_id)
            return GateDecision.OPEN

        if conversation_id in self._notified:
            return GateDecision.SUPPRESS

        self._notified.add(conversation_id)
        logger.info("Office closed, notifying %s", conversation_id)
        return GateDecision.NOTIFY

    def forget(self, conversation_id: str) -> None:
        """Drop the closed-notice mark so the next message notifies again."""
        self._notified.discard(conversation_id)

    def was_notified(self, conversation_id: str) -> bool:
        return conversation_id in self._notified

    def describe(self) -> str:
        """Schedule in Portuguese, e.g. ``segunda a sexta, das 09h às 18h``."""
        days = sorted(self.weekdays)
        if len(days) > 1 and days == list(range(days[0], days[-1] + 1)):
            span = f"{_DAY_NAMES[days[0]]} a {_DAY_NAMES[days[-1]]}"
        else:
            span = ", ".join(_DAY_NAMES[day] for day in days)
        return f"{span}, das {self.start_hour:02d}h às {self.end_hour:02d}h"
