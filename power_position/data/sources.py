"""Trade sources supplying day-ahead trades for a local calendar date."""

import random
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Any, Optional, Union

import structlog
import yaml

from ..errors import MalformedTradeError, TradeSourceError
from .models import MAX_PERIOD, MIN_PERIOD, Trade, TradePeriod

logger = structlog.get_logger(__name__)


class BaseTradeSource(ABC):
    """Base class for trade sources."""

    def __init__(self, name: str):
        self.name = name
        self.logger = logger.bind(source=name)
        self._request_count = 0

    @abstractmethod
    def get_trades(self, local_date: date) -> list[Trade]:
        """
        Retrieve all trades for a day-ahead local date.

        Args:
            local_date: Calendar date in the configured timezone

        Returns:
            List of trades, empty when nothing was traded
        """
        pass

    def get_stats(self) -> dict[str, object]:
        """Get request statistics."""
        return {
            "name": self.name,
            "request_count": self._request_count,
        }


class StaticTradeSource(BaseTradeSource):
    """In-memory trade source keyed by local date."""

    def __init__(self, trades: Optional[dict[date, list[Trade]]] = None, name: str = "static"):
        super().__init__(name)
        self._trades = dict(trades or {})

    def add_trade(self, trade: Trade) -> None:
        """Register a trade under its own date."""
        self._trades.setdefault(trade.date, []).append(trade)

    def get_trades(self, local_date: date) -> list[Trade]:
        self._request_count += 1
        trades = list(self._trades.get(local_date, []))
        self.logger.info("Retrieved trades", date=local_date.isoformat(), count=len(trades))
        return trades


class SimulatedTradeSource(BaseTradeSource):
    """
    Random trade generator for demo runs.

    Produces between one and ``max_trades`` trades with a volume for every
    period, and fails with ``TradeSourceError`` at the configured rate so the
    retry path of the scheduler can be observed.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        max_trades: int = 5,
        max_volume: float = 500.0,
        failure_rate: float = 0.0,
        name: str = "simulated",
    ):
        super().__init__(name)
        if max_trades < 1:
            raise ValueError("max_trades must be at least 1")
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        self._random = random.Random(seed)
        self.max_trades = max_trades
        self.max_volume = max_volume
        self.failure_rate = failure_rate

    def get_trades(self, local_date: date) -> list[Trade]:
        self._request_count += 1

        if self.failure_rate and self._random.random() < self.failure_rate:
            self.logger.warning("Simulated trade source failure", date=local_date.isoformat())
            raise TradeSourceError(
                f"Simulated failure retrieving trades for {local_date.isoformat()}",
                local_date=local_date,
            )

        trades = [
            Trade(
                date=local_date,
                periods=tuple(
                    TradePeriod(
                        period=period,
                        volume=round(self._random.uniform(-self.max_volume, self.max_volume), 2),
                    )
                    for period in range(MIN_PERIOD, MAX_PERIOD + 1)
                ),
            )
            for _ in range(self._random.randint(1, self.max_trades))
        ]
        self.logger.info("Generated simulated trades", date=local_date.isoformat(), count=len(trades))
        return trades


class YamlTradeSource(BaseTradeSource):
    """
    Trade source backed by a YAML file, re-read on every request.

    Expected layout::

        trades:
          - date: 2023-07-02
            periods:
              - {period: 1, volume: 100.0}
              - {period: 2, volume: -20.0}

    A single malformed record fails the whole request so that no partial
    book is ever aggregated.
    """

    def __init__(self, path: Union[str, Path], name: str = "yaml"):
        super().__init__(name)
        self.path = Path(path)

    def _load_records(self) -> list[Any]:
        try:
            with open(self.path, encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise TradeSourceError(
                f"Cannot read trade file {self.path}: {e}",
                context={"path": str(self.path)},
            ) from e

        if content is None:
            return []
        if not isinstance(content, dict) or not isinstance(content.get("trades") or [], list):
            raise TradeSourceError(
                f"Trade file {self.path} must contain a 'trades' list",
                context={"path": str(self.path)},
            )
        return content.get("trades") or []

    def get_trades(self, local_date: date) -> list[Trade]:
        self._request_count += 1
        trades = []

        for index, record in enumerate(self._load_records()):
            try:
                trade = Trade.from_dict(record)
            except MalformedTradeError as e:
                self.logger.error(
                    "Malformed trade record",
                    path=str(self.path),
                    index=index,
                    expected_format=e.expected_format,
                    error=str(e),
                )
                raise TradeSourceError(
                    f"Malformed trade record #{index} in {self.path}: {e}",
                    local_date=local_date,
                    context={"path": str(self.path), "index": index},
                ) from e

            if trade.date == local_date:
                trades.append(trade)

        self.logger.info("Loaded trades from file", date=local_date.isoformat(), path=str(self.path), count=len(trades))
        return trades
