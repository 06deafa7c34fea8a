"""Sparse fetching of a schema subfolder from a Git repository."""

import logging
import shutil
import subprocess
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)


class SubfolderNotFoundError(FileNotFoundError):
    """Raised when the requested subfolder is absent after checkout."""


def _git(args: list[str], cwd: Path | None = None) -> None:
    logger.debug(f"Running git {' '.join(args)}")
    subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True)


def sparse_fetch(repo_url: str, subfolder: str, output_dir: Path) -> list[Path]:
    """Fetch ``subfolder`` of a repository and flatten it into ``output_dir``.

    The output directory is replaced by a blobless, sparse clone. Files found
    directly inside the subfolder are moved to the output root, after which
    the subfolder's top-level directory and the clone metadata are removed,
    leaving a flat directory of files.

    Args:
        repo_url: SSH or HTTPS repository URL
        subfolder: Path of the folder inside the repository (e.g. 'src/db/schema')
        output_dir: Directory that receives the flattened files

    Returns:
        Paths of the flattened files, sorted by name

    Raises:
        SubfolderNotFoundError: If the subfolder does not exist in the repository
        subprocess.CalledProcessError: If a git command fails
    """
    if not subfolder.strip("/"):
        raise ValueError("subfolder must name a folder inside the repository")

    output_dir = output_dir.resolve()
    if output_dir.exists():
        shutil.rmtree(output_dir)

    _git(["clone", "--no-checkout", "--filter=blob:none", repo_url, str(output_dir)])
    _git(["sparse-checkout", "init", "--no-cone"], cwd=output_dir)
    _git(["sparse-checkout", "set", subfolder], cwd=output_dir)
    _git(["checkout"], cwd=output_dir)

    subfolder_path = output_dir / subfolder
    if not subfolder_path.is_dir():
        msg = f"Repo subfolder not found: {subfolder}"
        raise SubfolderNotFoundError(msg)

    for source in sorted(subfolder_path.iterdir()):
        if source.is_file() and not source.is_symlink():
            source.rename(output_dir / source.name)

    top_level = PurePosixPath(subfolder.strip("/")).parts[0]
    for leftover in (output_dir / top_level, output_dir / ".git"):
        if leftover.is_dir():
            shutil.rmtree(leftover)

    files = sorted(path for path in output_dir.iterdir() if path.is_file())
    logger.info(f"Fetched {len(files)} file(s) from {repo_url}:{subfolder}")
    return files
