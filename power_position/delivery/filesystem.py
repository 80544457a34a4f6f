"""File system wrapper with logging and error classification."""

from collections.abc import Iterable
from pathlib import Path
from typing import Union

import structlog

from ..errors import PersistenceError

logger = structlog.get_logger(__name__)

PathLike = Union[str, Path]


class FileSystem:
    """Basic file and directory operations used by report writers."""

    def directory_exists(self, path: PathLike) -> bool:
        try:
            return Path(path).is_dir()
        except OSError as e:
            logger.error("Error checking if directory exists", path=str(path), error=str(e))
            return False

    def create_directory(self, path: PathLike) -> None:
        if self.directory_exists(path):
            return
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Error creating directory", path=str(path), error=str(e))
            raise PersistenceError(
                f"Cannot create directory {path}: {e}",
                operation="create_directory",
                target=str(path),
            ) from e
        logger.info("Created directory", path=str(path))

    def file_exists(self, path: PathLike) -> bool:
        try:
            return Path(path).is_file()
        except OSError as e:
            logger.error("Error checking if file exists", path=str(path), error=str(e))
            return False

    def delete_file(self, path: PathLike) -> None:
        if not self.file_exists(path):
            return
        try:
            Path(path).unlink()
        except OSError as e:
            logger.error("Error deleting file", path=str(path), error=str(e))
            raise PersistenceError(
                f"Cannot delete file {path}: {e}",
                operation="delete_file",
                target=str(path),
            ) from e
        logger.info("Deleted file", path=str(path))

    def write_lines(self, path: PathLike, lines: Iterable[str]) -> None:
        """Write lines to a file, replacing any previous content."""
        try:
            with open(path, "w", newline="", encoding="utf-8") as f:
                for line in lines:
                    f.write(line)
                    f.write("\n")
        except OSError as e:
            logger.error("Error writing file", path=str(path), error=str(e))
            raise PersistenceError(
                f"Cannot write file {path}: {e}",
                operation="write_lines",
                target=str(path),
            ) from e
