"""Reading schema source files from a local directory."""

import logging
from pathlib import Path

from core.models import SourceFile

logger = logging.getLogger(__name__)


def list_schema_files(directory: Path, extension: str = ".ts") -> list[Path]:
    """List schema files directly inside ``directory``, sorted by name.

    Args:
        directory: Directory to scan (not recursive)
        extension: File extension of schema sources

    Returns:
        Sorted list of file paths

    Raises:
        FileNotFoundError: If the directory does not exist
    """
    if not directory.is_dir():
        msg = f"Schema directory not found: {directory}"
        raise FileNotFoundError(msg)
    return sorted(path for path in directory.iterdir() if path.is_file() and path.suffix == extension)


def read_schema_files(directory: Path, extension: str = ".ts") -> list[SourceFile]:
    """Read every schema file of ``directory`` into source files.

    File names are absolute paths so outputs can be written next to them.
    """
    files = [
        SourceFile(file_name=str(path.resolve()), content=path.read_text(encoding="utf-8"))
        for path in list_schema_files(directory, extension)
    ]
    logger.debug(f"Read {len(files)} schema file(s) from {directory}")
    return files


def read_schema_path(path: Path, extension: str = ".ts") -> list[SourceFile]:
    """Read a single schema file or every schema file of a directory."""
    if path.is_file():
        return [SourceFile(file_name=str(path.resolve()), content=path.read_text(encoding="utf-8"))]
    return read_schema_files(path, extension)
