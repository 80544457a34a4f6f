"""
Interval boundary arithmetic for scheduled extractions.

Boundaries are multiples of the interval length measured from 00:00 UTC;
the day-ahead date is derived from civil time in the configured zone so the
business date does not depend on where the process runs.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from ..config.validation import ValidationError
from ..errors import ConfigurationError
from ..utils.time import (
    ensure_utc,
    minutes_since_utc_midnight,
    resolve_timezone,
    to_local_time,
    utc_midnight,
)
from .clock import Clock, SystemClock

EXECUTION_TOLERANCE = timedelta(minutes=1)


class ScheduleCalculator:
    """Calculates execution schedules for position extractions."""

    def __init__(self, interval_minutes: int, timezone_id: str, clock: Optional[Clock] = None):
        if isinstance(interval_minutes, bool) or not isinstance(interval_minutes, int) or interval_minutes <= 0:
            raise ConfigurationError(
                "Extract interval must be a positive number of minutes",
                errors=[ValidationError(
                    field="interval_minutes",
                    message="Must be a positive integer",
                    value=interval_minutes,
                )],
            )

        self.interval_minutes = interval_minutes
        self.timezone_id = timezone_id
        self.zone = resolve_timezone(timezone_id)
        self.clock = clock or SystemClock()

    def _now(self, now: Optional[datetime]) -> datetime:
        return ensure_utc(now) if now is not None else self.clock.now()

    def current_interval_boundary(self, now: Optional[datetime] = None) -> datetime:
        """Interval boundary at or before the instant."""
        now = self._now(now)
        index = minutes_since_utc_midnight(now) // self.interval_minutes
        return utc_midnight(now) + timedelta(minutes=index * self.interval_minutes)

    def next_interval_boundary(self, now: Optional[datetime] = None) -> datetime:
        """
        First interval boundary strictly after the instant.

        Boundaries past the end of the UTC day roll into the following day.
        """
        now = self._now(now)
        index = minutes_since_utc_midnight(now) // self.interval_minutes
        return utc_midnight(now) + timedelta(minutes=(index + 1) * self.interval_minutes)

    def delay_until_next_execution(self, now: Optional[datetime] = None) -> timedelta:
        """Time left until the next interval boundary."""
        now = self._now(now)
        return self.next_interval_boundary(now) - now

    def is_within_execution_window(self, now: Optional[datetime] = None) -> bool:
        """
        Check if the instant is close enough to its interval boundary to run on time.

        An extraction does not have to start exactly on the boundary; anything
        within one minute of the boundary at or before now is on time.
        """
        now = self._now(now)
        return abs(now - self.current_interval_boundary(now)) <= EXECUTION_TOLERANCE

    def local_now(self, now: Optional[datetime] = None) -> datetime:
        """Current civil time in the configured zone."""
        return to_local_time(self._now(now), self.zone)

    def day_ahead_date(self, now: Optional[datetime] = None) -> date:
        """Local calendar date following today in the configured zone."""
        return self.local_now(now).date() + timedelta(days=1)
