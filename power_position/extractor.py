"""
Position extraction coordinator.

Runs one extraction end to end: resolve the day-ahead date, fetch its trades,
aggregate them into hourly UTC positions and hand those to the report writer.
"""

from datetime import datetime
from typing import Optional

import structlog

from .data.models import ExtractionReport
from .data.sources import BaseTradeSource
from .delivery.base import BasePositionWriter
from .errors import SystemFailureError, TradeSourceError
from .logging.config import log_extraction_summary
from .positions.aggregator import PositionAggregator
from .scheduling.calculator import ScheduleCalculator
from .utils.time import ensure_utc

logger = structlog.get_logger(__name__)


class PositionExtractor:
    """
    Coordinates a single position extraction.

    Pipeline:
    Day-ahead date → Trade source → Aggregation → Report writer
    """

    def __init__(
        self,
        trade_source: BaseTradeSource,
        writer: BasePositionWriter,
        schedule_calculator: ScheduleCalculator,
        aggregator: Optional[PositionAggregator] = None,
    ) -> None:
        self.logger = logger
        self.trade_source = trade_source
        self.writer = writer
        self.schedule_calculator = schedule_calculator
        self.aggregator = aggregator or PositionAggregator()

    @property
    def timezone_id(self) -> str:
        return self.schedule_calculator.timezone_id

    def get_stats(self) -> dict[str, dict[str, object]]:
        """Request and write counters of the wired source and writer."""
        return {
            "source": self.trade_source.get_stats(),
            "writer": self.writer.get_stats(),
        }

    def extract(self, now: Optional[datetime] = None) -> ExtractionReport:
        """
        Run one extraction.

        Args:
            now: Extraction instant, defaults to the calculator's clock

        Returns:
            ExtractionReport describing what was produced

        Raises:
            TradeSourceError: If trades could not be retrieved
            TimeZoneNotFoundError: If the grid could not be built
            PersistenceError: If the report could not be written
        """
        extraction_time = ensure_utc(now) if now is not None else self.schedule_calculator.clock.now()
        day_ahead_date = self.schedule_calculator.day_ahead_date(extraction_time)
        date_str = day_ahead_date.isoformat()

        self.logger.info(
            "Starting position extraction",
            day_ahead_date=date_str,
            timezone=self.timezone_id,
        )

        try:
            trades = self.trade_source.get_trades(day_ahead_date)
        except TradeSourceError:
            self.logger.error("Error retrieving trades", day_ahead_date=date_str, exc_info=True)
            raise
        except Exception as e:
            self.logger.error("Error retrieving trades", day_ahead_date=date_str, exc_info=True)
            raise TradeSourceError(
                f"Trade source {self.trade_source.name!r} failed for {date_str}: {e}",
                local_date=day_ahead_date,
            ) from e

        if not trades:
            self.logger.warning("No trades found", day_ahead_date=date_str)
            return ExtractionReport(day_ahead_date=day_ahead_date, extraction_time=extraction_time)

        self.logger.info("Retrieved trades", day_ahead_date=date_str, count=len(trades))

        try:
            result = self.aggregator.aggregate(trades, self.timezone_id)
            output_path = self.writer.write(result.positions, day_ahead_date, extraction_time)
        except SystemFailureError:
            self.logger.error("Error during position extraction", day_ahead_date=date_str, exc_info=True)
            raise

        report = ExtractionReport(
            day_ahead_date=day_ahead_date,
            extraction_time=extraction_time,
            trade_count=len(trades),
            positions=result.positions,
            discarded=result.discarded,
            output_path=str(output_path),
        )

        log_extraction_summary(
            self.logger,
            day_ahead_date=date_str,
            trade_count=report.trade_count,
            position_count=len(report.positions),
            discarded_count=len(report.discarded),
            output_path=report.output_path,
        )

        return report
