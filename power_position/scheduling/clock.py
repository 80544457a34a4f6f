"""Clock abstractions supplying the current UTC instant."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..utils.time import ensure_utc


class Clock(ABC):
    """Source of the current instant."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant as an aware UTC datetime."""
        pass


class SystemClock(Clock):
    """Wall-clock time of the host."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ManualClock(Clock):
    """Clock that only moves when told to; used by tests and replays."""

    def __init__(self, start: Optional[datetime] = None):
        self._now = ensure_utc(start) if start is not None else datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self._now

    def set(self, ts: datetime) -> None:
        """Jump to an instant; moving backwards is rejected."""
        ts = ensure_utc(ts)
        if ts < self._now:
            raise ValueError("ManualClock cannot move backwards")
        self._now = ts

    def advance(self, delta: timedelta) -> datetime:
        """Move forward by a non-negative duration and return the new instant."""
        if delta < timedelta(0):
            raise ValueError("ManualClock cannot move backwards")
        self._now = self._now + delta
        return self._now
