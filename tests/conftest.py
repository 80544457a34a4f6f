"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date, datetime, timezone

from power_position.data.models import Trade, TradePeriod
from power_position.scheduling.calculator import ScheduleCalculator
from power_position.scheduling.clock import ManualClock

BERLIN = "Europe/Berlin"


@pytest.fixture
def manual_clock() -> ManualClock:
    """Clock fixed at 2023-07-01 10:30 UTC (12:30 CEST in Berlin)."""
    return ManualClock(datetime(2023, 7, 1, 10, 30, 0, tzinfo=timezone.utc))


@pytest.fixture
def schedule_calculator(manual_clock: ManualClock) -> ScheduleCalculator:
    """15 minute Berlin schedule driven by the manual clock."""
    return ScheduleCalculator(interval_minutes=15, timezone_id=BERLIN, clock=manual_clock)


@pytest.fixture
def day_ahead_trades() -> list[Trade]:
    """Three trades for 2023-07-02: 150 per hour for periods 1-11, 130 for 12-24."""
    delivery_date = date(2023, 7, 2)
    return [
        Trade.from_volumes(delivery_date, [100.0] * 24),
        Trade.from_volumes(delivery_date, [50.0] * 24),
        Trade(
            date=delivery_date,
            periods=tuple(
                TradePeriod(period=p, volume=0.0 if p <= 11 else -20.0)
                for p in range(1, 25)
            ),
        ),
    ]
