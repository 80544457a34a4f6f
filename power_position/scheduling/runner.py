"""
Scheduled extraction driver.

Runs an extraction immediately, then once per interval boundary until
stopped. Each run is retried with a fixed delay between attempts; when every
attempt fails the error is raised to the caller instead of being swallowed.
Stop requests are honoured at every wait and around every attempt, never in
the middle of an extraction.
"""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import RetryParams
from ..data.models import ExtractionReport
from ..errors import RetriesExhaustedError
from ..extractor import PositionExtractor
from ..logging.config import get_scheduler_logger
from ..utils.time import format_utc_timestamp
from .calculator import ScheduleCalculator


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-delay retry policy."""
    max_attempts: int = 3
    delay_seconds: float = 5.0

    @classmethod
    def from_params(cls, params: RetryParams) -> "RetryPolicy":
        return cls(max_attempts=params.max_attempts, delay_seconds=float(params.delay_seconds))


class ScheduledExtractor:
    """Drives extractions on interval boundaries."""

    def __init__(
        self,
        extractor: PositionExtractor,
        schedule_calculator: ScheduleCalculator,
        retry_policy: Optional[RetryPolicy] = None,
        stop_event: Optional[threading.Event] = None,
        waiter: Optional[Callable[[float], bool]] = None,
    ) -> None:
        """
        Args:
            extractor: Runs a single extraction
            schedule_calculator: Supplies boundaries, delays and the clock
            retry_policy: Attempts and constant delay per run
            stop_event: Set to request a cooperative stop
            waiter: Blocks for the given seconds and returns True if a stop was
                requested meanwhile; defaults to waiting on stop_event
        """
        self.logger = get_scheduler_logger(__name__)
        self.extractor = extractor
        self.schedule_calculator = schedule_calculator
        self.retry_policy = retry_policy or RetryPolicy()
        self.stop_event = stop_event or threading.Event()
        self._waiter = waiter or self.stop_event.wait
        self.reports: list[ExtractionReport] = []

    @property
    def stopped(self) -> bool:
        return self.stop_event.is_set()

    def stop(self) -> None:
        """Request the loop to finish at its next wait point."""
        self.logger.info("Stop requested")
        self.stop_event.set()

    def _wait(self, seconds: float) -> bool:
        """Wait and report whether a stop was requested."""
        return self._waiter(max(seconds, 0.0)) or self.stopped

    def run(self, max_cycles: Optional[int] = None) -> list[ExtractionReport]:
        """
        Run the initial extraction and then the scheduled cycles.

        Args:
            max_cycles: Number of scheduled cycles after the initial run,
                None to run until stopped

        Returns:
            Reports of every completed extraction

        Raises:
            RetriesExhaustedError: If a run failed on every attempt
        """
        self.logger.info("Starting scheduled extractor", interval_minutes=self.schedule_calculator.interval_minutes)

        self.logger.info("Starting initial position extraction")
        if self.run_extraction() is None:
            return self.reports

        cycles = 0
        while not self.stopped and (max_cycles is None or cycles < max_cycles):
            now = self.schedule_calculator.clock.now()
            next_run = self.schedule_calculator.next_interval_boundary(now)
            delay = next_run - now
            self.logger.info(
                "Next extraction scheduled",
                next_extraction=format_utc_timestamp(next_run),
                delay_minutes=round(delay.total_seconds() / 60, 1),
            )

            if self._wait(delay.total_seconds()):
                break

            if not self.schedule_calculator.is_within_execution_window():
                self.logger.warning("Scheduled time has passed tolerance window, running extraction immediately")

            if self.run_extraction() is None:
                break
            cycles += 1

        self.logger.info(
            "Scheduled extractor stopped",
            completed_runs=len(self.reports),
            stats=self.extractor.get_stats(),
        )
        return self.reports

    def run_extraction(self) -> Optional[ExtractionReport]:
        """
        Run one extraction with the fixed-delay retry policy.

        Returns:
            The extraction report, None if a stop was requested first

        Raises:
            RetriesExhaustedError: If every attempt failed
        """
        last_error: Optional[Exception] = None

        for attempt in range(1, self.retry_policy.max_attempts + 1):
            if self.stopped:
                return None

            started = time.monotonic()
            self.logger.info("Running position extraction", attempt=attempt)
            try:
                report = self.extractor.extract()
            except Exception as e:
                last_error = e
                self.logger.error(
                    "Extraction failed",
                    attempt=attempt,
                    max_attempts=self.retry_policy.max_attempts,
                    error=str(e),
                    exc_info=True,
                )
            else:
                self.logger.info(
                    "Extraction completed successfully",
                    attempt=attempt,
                    duration_seconds=round(time.monotonic() - started, 2),
                )
                self.reports.append(report)
                return report

            if attempt < self.retry_policy.max_attempts:
                self.logger.warning("Retrying extraction", retry_in_seconds=self.retry_policy.delay_seconds)
                if self._wait(self.retry_policy.delay_seconds):
                    return None

        raise RetriesExhaustedError(
            f"Extraction failed after {self.retry_policy.max_attempts} attempts: {last_error}",
            attempts=self.retry_policy.max_attempts,
            last_error=last_error,
        ) from last_error
