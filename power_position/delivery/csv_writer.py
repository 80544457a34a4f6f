"""CSV position report writer."""

from datetime import date, datetime
from pathlib import Path
from typing import Optional

from ..data.models import Position
from ..errors import PersistenceError
from ..utils.time import ensure_utc, format_utc_timestamp
from .base import BasePositionWriter
from .filesystem import FileSystem

CSV_HEADER = "Datetime;Volume"
CSV_SEPARATOR = ";"


def generate_file_name(day_ahead_date: date, extraction_time: datetime) -> str:
    """
    Report file name for a run.

    Format: PowerPosition_YYYYMMDD_YYYYMMDDHHMM.csv, extraction time in UTC.
    """
    extraction_time = ensure_utc(extraction_time)
    return f"PowerPosition_{day_ahead_date:%Y%m%d}_{extraction_time:%Y%m%d%H%M}.csv"


def format_position(position: Position) -> str:
    """Single CSV line for a position, volume with two decimals."""
    return f"{format_utc_timestamp(position.ts)}{CSV_SEPARATOR}{position.volume:.2f}"


class CsvPositionWriter(BasePositionWriter):
    """Writes one semicolon-separated CSV report per extraction run."""

    def __init__(self, output_folder: str, filesystem: Optional[FileSystem] = None, name: str = "csv"):
        super().__init__(name, output_folder)
        self.output_folder = Path(output_folder)
        self.filesystem = filesystem or FileSystem()

    def write(self, positions: list[Position], day_ahead_date: date, extraction_time: datetime) -> Path:
        file_path = self.output_folder / generate_file_name(day_ahead_date, extraction_time)

        self.logger.info(
            "Writing positions to CSV file",
            delivery_name=self.name,
            count=len(positions),
            output_path=str(file_path),
        )

        lines = [CSV_HEADER]
        lines.extend(format_position(position) for position in sorted(positions, key=lambda p: p.ts))

        try:
            self.filesystem.create_directory(self.output_folder)
            self.filesystem.write_lines(file_path, lines)
        except PersistenceError:
            self._error_count += 1
            self.logger.error(
                "Error writing CSV file",
                delivery_name=self.name,
                day_ahead_date=day_ahead_date.isoformat(),
                output_path=str(file_path),
                exc_info=True,
            )
            raise

        self._write_count += 1
        self.logger.info("Successfully wrote CSV file", delivery_name=self.name, output_path=str(file_path))
        return file_path

    def health_check(self) -> bool:
        """Check if the output folder is writable."""
        try:
            self.filesystem.create_directory(self.output_folder)
            test_file = self.output_folder / ".health_check_test"
            self.filesystem.write_lines(test_file, ["test"])
            self.filesystem.delete_file(test_file)
            return True

        except PersistenceError as e:
            self.logger.warning(
                "Health check failed",
                delivery_name=self.name,
                error=str(e)
            )
            return False
