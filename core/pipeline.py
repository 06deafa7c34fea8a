"""Directory-level conversion runs.

These functions own all file I/O around the pure converter: they read the
schema sources, convert the whole batch, and only then write any output.
"""

import logging
from pathlib import Path

from core.converter import convert_schemas
from core.models import ConversionSummary
from core.sources.git import sparse_fetch
from core.sources.local import read_schema_files

logger = logging.getLogger(__name__)


def _write_outputs(outputs: dict[str, str], output_dir: Path) -> list[str]:
    written = []
    for file_name, content in outputs.items():
        target = output_dir / Path(file_name).name
        target.write_text(content, encoding="utf-8")
        written.append(str(target))
    return written


def convert_local_schemas(
    input_dir: Path,
    output_dir: Path,
    source_extension: str = ".ts",
    output_extension: str = ".js",
) -> ConversionSummary:
    """Convert the schema files of ``input_dir`` into ``output_dir``.

    The input files are left untouched; the output directory is created if
    missing.

    Args:
        input_dir: Directory containing schema source files
        output_dir: Directory receiving the generated modules
        source_extension: Extension of the schema sources
        output_extension: Extension of the generated modules

    Returns:
        Summary of the run
    """
    input_dir = input_dir.resolve()
    output_dir = output_dir.resolve()
    output_dir.mkdir(parents=True, exist_ok=True)

    files = read_schema_files(input_dir, source_extension)
    if not files:
        logger.warning(f"No {source_extension} files found in {input_dir}")
        return ConversionSummary(mode="local")

    outputs = convert_schemas(files, output_extension)
    written = _write_outputs(outputs, output_dir)
    return ConversionSummary(mode="local", files_converted=len(files), outputs=written)


def fetch_and_convert_schemas(
    repo_url: str,
    subfolder: str,
    output_dir: Path,
    source_extension: str = ".ts",
    output_extension: str = ".js",
) -> ConversionSummary:
    """Fetch a repository subfolder and convert its schema files in place.

    The original source files are deleted once the whole batch converted and
    every output was written.

    Args:
        repo_url: SSH or HTTPS repository URL
        subfolder: Folder inside the repository holding the schema files
        output_dir: Directory that receives the fetched files and the outputs
        source_extension: Extension of the schema sources
        output_extension: Extension of the generated modules

    Returns:
        Summary of the run
    """
    output_dir = output_dir.resolve()
    sparse_fetch(repo_url, subfolder, output_dir)

    files = read_schema_files(output_dir, source_extension)
    if not files:
        logger.warning(f"No {source_extension} files found in {repo_url}:{subfolder}")
        return ConversionSummary(mode="git")

    outputs = convert_schemas(files, output_extension)
    written = _write_outputs(outputs, output_dir)

    for source in files:
        if source.file_name not in written:
            Path(source.file_name).unlink()

    return ConversionSummary(mode="git", files_converted=len(files), outputs=written)
