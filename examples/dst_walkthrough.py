#!/usr/bin/env python3
"""
DST Walkthrough Example - Power Position Extractor

This script shows how the extractor reconciles day-ahead periods with the
civil clock of the configured timezone. It shows how to:
- Build hourly time grids for regular and transition dates
- Aggregate trades and inspect discarded periods
- Compute schedule boundaries and the day-ahead date
- Write a CSV report into a temporary folder

Run: python examples/dst_walkthrough.py
"""

import tempfile
from datetime import date, datetime, timezone

from power_position.data.models import Trade
from power_position.data.sources import StaticTradeSource
from power_position.delivery.csv_writer import CsvPositionWriter
from power_position.extractor import PositionExtractor
from power_position.logging import configure_logging
from power_position.positions import PositionAggregator, build_hourly_grid
from power_position.scheduling import ManualClock, ScheduleCalculator
from power_position.utils.time import format_utc_timestamp

TIMEZONE = "Europe/Berlin"


def show_grids() -> None:
    """Print grid sizes around the Berlin transitions."""
    print("\n🕐 Hourly grids")
    for label, local_date in [
        ("regular", date(2024, 7, 1)),
        ("spring forward", date(2024, 3, 31)),
        ("fall back", date(2024, 10, 27)),
    ]:
        grid = build_hourly_grid(local_date, TIMEZONE)
        print(f"  {local_date} ({label}): {len(grid)} hours, "
              f"{format_utc_timestamp(grid[0])} .. {format_utc_timestamp(grid[-1])}")


def show_aggregation() -> None:
    """Aggregate a flat trade on each transition date."""
    print("\n📊 Aggregation")
    aggregator = PositionAggregator()
    for local_date in (date(2024, 3, 31), date(2024, 10, 27)):
        result = aggregator.aggregate([Trade.from_volumes(local_date, [10.0] * 24)], TIMEZONE)
        total = sum(position.volume for position in result.positions)
        print(f"  {local_date}: {len(result.positions)} positions, total {total:.2f}, "
              f"discarded {[(d.period, d.reason) for d in result.discarded]}")


def show_schedule(clock: ManualClock) -> ScheduleCalculator:
    """Print boundary arithmetic for a 15 minute schedule."""
    print("\n⏱️  Schedule")
    calculator = ScheduleCalculator(interval_minutes=15, timezone_id=TIMEZONE, clock=clock)
    print(f"  now:               {format_utc_timestamp(clock.now())}")
    print(f"  next boundary:     {format_utc_timestamp(calculator.next_interval_boundary())}")
    print(f"  delay:             {calculator.delay_until_next_execution()}")
    print(f"  on time:           {calculator.is_within_execution_window()}")
    print(f"  day-ahead date:    {calculator.day_ahead_date()}")
    return calculator


def main() -> None:
    configure_logging(level="WARNING")
    print("🚀 Power Position DST walkthrough")

    show_grids()
    show_aggregation()

    clock = ManualClock(datetime(2024, 3, 30, 10, 30, tzinfo=timezone.utc))
    calculator = show_schedule(clock)

    source = StaticTradeSource()
    source.add_trade(Trade.from_volumes(date(2024, 3, 31), [100.0] * 24))
    source.add_trade(Trade.from_volumes(date(2024, 3, 31), [-25.0] * 24))

    with tempfile.TemporaryDirectory() as output_folder:
        extractor = PositionExtractor(source, CsvPositionWriter(output_folder), calculator)
        report = extractor.extract()

        print("\n📝 Report")
        print(f"  written to {report.output_path}")
        with open(report.output_path) as f:
            for line in f.read().splitlines()[:5]:
                print(f"    {line}")
        print("    ...")

    print("\n🎉 Done")


if __name__ == "__main__":
    main()
