"""Hourly position aggregation over a DST-adjusted time grid"""

from collections.abc import Iterable
from typing import Optional

import structlog

from ..data.models import (
    MAX_PERIOD,
    MIN_PERIOD,
    AggregationResult,
    DiscardedPeriod,
    Position,
    Trade,
)
from ..utils.time import format_utc_timestamp
from .time_grid import TimeGrid, TimeGridBuilder

logger = structlog.get_logger(__name__)

OUT_OF_RANGE = "out_of_range"
BEYOND_GRID = "beyond_grid"


def period_slot(period: int, grid_size: int) -> tuple[Optional[int], Optional[str]]:
    """
    Map a period number onto a grid index.

    Args:
        period: Period number from a trade
        grid_size: Number of instants in the day's grid

    Returns:
        (index, None) for a usable period, (None, reason) when it must be discarded
    """
    if not MIN_PERIOD <= period <= MAX_PERIOD:
        return None, OUT_OF_RANGE
    index = period - 1
    if index >= grid_size:
        return None, BEYOND_GRID
    return index, None


def sum_volumes(trades: Iterable[Trade], grid: TimeGrid) -> tuple[list[float], list[DiscardedPeriod]]:
    """
    Sum period volumes of all trades into grid-ordered buckets.

    Args:
        trades: Trades for the grid's date
        grid: Ordered UTC instants

    Returns:
        Tuple of (volumes aligned with grid, discarded periods)
    """
    volumes = [0.0] * len(grid)
    discarded: list[DiscardedPeriod] = []

    for trade in trades:
        for item in trade.periods:
            index, reason = period_slot(item.period, len(grid))
            if index is None:
                discarded.append(DiscardedPeriod(period=item.period, volume=item.volume, reason=reason))
                logger.debug(
                    "Discarding period without grid slot",
                    period=item.period,
                    volume=item.volume,
                    reason=reason,
                    grid_size=len(grid),
                )
                continue

            volumes[index] += item.volume
            logger.debug(
                "Mapped period to hour",
                period=item.period,
                index=index,
                hour=format_utc_timestamp(grid[index]),
                volume=item.volume,
                total=volumes[index],
            )

    return volumes, discarded


class PositionAggregator:
    """Aggregates trade volumes into hourly UTC positions"""

    def __init__(self, time_grid_builder: Optional[TimeGridBuilder] = None):
        self.time_grid_builder = time_grid_builder or TimeGridBuilder()

    def aggregate(self, trades: Iterable[Trade], timezone_id: str) -> AggregationResult:
        """
        Aggregate trades by delivery hour.

        The first trade's date selects the grid; every trade is assumed to
        share it.

        Args:
            trades: Trades for one day-ahead date
            timezone_id: Timezone the trade dates and periods refer to

        Returns:
            AggregationResult with grid-ordered positions and discarded periods
        """
        trades = list(trades)
        if not trades:
            logger.warning("No trades provided for aggregation")
            return AggregationResult()

        delivery_date = trades[0].date
        try:
            grid = self.time_grid_builder.build_hourly_grid(delivery_date, timezone_id)
            volumes, discarded = sum_volumes(trades, grid)
        except Exception:
            logger.error(
                "Error aggregating positions by hour",
                date=delivery_date.isoformat(),
                timezone=timezone_id,
                exc_info=True,
            )
            raise

        positions = [Position(ts=ts, volume=volume) for ts, volume in zip(grid, volumes)]

        logger.info(
            "Aggregated hourly positions",
            date=delivery_date.isoformat(),
            timezone=timezone_id,
            count=len(positions),
            discarded=len(discarded),
        )

        return AggregationResult(positions=positions, discarded=discarded)
