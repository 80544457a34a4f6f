"""Base classes for position report writers."""

from abc import ABC, abstractmethod
from datetime import date, datetime
from pathlib import Path
from typing import Any

import structlog

from ..data.models import Position


class BasePositionWriter(ABC):
    """Base class for position report writers."""

    def __init__(self, name: str, config: Any):
        self.name = name
        self.config = config
        self.logger = structlog.get_logger(f"position.delivery.{name}")
        self._write_count = 0
        self._error_count = 0

    @abstractmethod
    def write(self, positions: list[Position], day_ahead_date: date, extraction_time: datetime) -> Path:
        """
        Write positions for one extraction run.

        Args:
            positions: Grid-ordered hourly positions
            day_ahead_date: Local date the positions belong to
            extraction_time: UTC instant the extraction ran

        Returns:
            Path of the written report

        Raises:
            PersistenceError: If the report could not be written
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the destination is writable."""
        pass

    def get_stats(self) -> dict[str, Any]:
        """Get write statistics."""
        return {
            "name": self.name,
            "write_count": self._write_count,
            "error_count": self._error_count,
            "success_rate": (
                self._write_count / (self._write_count + self._error_count)
                if (self._write_count + self._error_count) > 0 else 0.0
            )
        }
