"""
Canonical data models for trades and positions.

This module defines immutable data structures passed between the trade
source, the aggregator and the report writer. All instants are aware UTC
datetimes; trade dates are local calendar dates in the configured timezone.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..errors import MalformedTradeError

MIN_PERIOD = 1
MAX_PERIOD = 24


@dataclass(frozen=True)
class TradePeriod:
    """Volume traded for one hourly delivery slot."""
    period: int        # 1..24 slot within the day-ahead schedule
    volume: float      # Signed volume


@dataclass(frozen=True)
class Trade:
    """Day-ahead trade with its hourly periods (unordered, not validated)."""
    date: date
    periods: tuple[TradePeriod, ...] = ()

    @classmethod
    def from_volumes(cls, trade_date: date, volumes: list[float]) -> "Trade":
        """Build a trade whose volumes are listed in period order starting at 1."""
        return cls(
            date=trade_date,
            periods=tuple(
                TradePeriod(period=index, volume=float(volume))
                for index, volume in enumerate(volumes, start=MIN_PERIOD)
            ),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Trade":
        """
        Build a trade from a raw mapping.

        Expected shape: {"date": "2023-07-02", "periods": [{"period": 1, "volume": 100.0}, ...]}

        Raises:
            MalformedTradeError: If the mapping cannot be interpreted
        """
        try:
            raw_date = data["date"]
            trade_date = raw_date if isinstance(raw_date, date) else date.fromisoformat(str(raw_date))
            periods = tuple(
                TradePeriod(period=int(item["period"]), volume=float(item["volume"]))
                for item in data.get("periods") or []
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedTradeError(
                f"Cannot parse trade record: {e}",
                raw_data=data,
                expected_format="{date, periods: [{period, volume}]}",
            ) from e

        return cls(date=trade_date, periods=periods)


@dataclass(frozen=True)
class Position:
    """Aggregated volume for one UTC delivery hour."""
    ts: datetime       # UTC start of the delivery hour
    volume: float


@dataclass(frozen=True)
class DiscardedPeriod:
    """Period whose volume could not be mapped onto the time grid."""
    period: int
    volume: float
    reason: str        # "out_of_range" or "beyond_grid"


@dataclass(frozen=True)
class AggregationResult:
    """Ordered positions plus every period dropped while aggregating."""
    positions: list[Position] = field(default_factory=list)
    discarded: list[DiscardedPeriod] = field(default_factory=list)

    @property
    def discarded_volume(self) -> float:
        """Total volume that did not reach any position."""
        return sum(item.volume for item in self.discarded)


@dataclass(frozen=True)
class ExtractionReport:
    """Summary of one extraction run."""
    day_ahead_date: date
    extraction_time: datetime
    trade_count: int = 0
    positions: list[Position] = field(default_factory=list)
    discarded: list[DiscardedPeriod] = field(default_factory=list)
    output_path: Optional[str] = None

    @property
    def written(self) -> bool:
        """True when a report file was produced."""
        return self.output_path is not None
