"""Report writers and file system access."""

from .base import BasePositionWriter
from .csv_writer import CsvPositionWriter
from .filesystem import FileSystem

__all__ = ["BasePositionWriter", "CsvPositionWriter", "FileSystem"]
