"""Schema source acquisition (local directories and Git repositories)."""

from core.sources.git import SubfolderNotFoundError, sparse_fetch
from core.sources.local import list_schema_files, read_schema_files, read_schema_path

__all__ = [
    "SubfolderNotFoundError",
    "list_schema_files",
    "read_schema_files",
    "read_schema_path",
    "sparse_fetch",
]
