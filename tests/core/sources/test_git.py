"""Tests for sparse Git fetching"""

import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from core.sources.git import SubfolderNotFoundError, sparse_fetch

REPO = "git@github.com:acme/api.git"


def fake_git(files: dict[str, str]) -> Callable[..., subprocess.CompletedProcess[str]]:
    """Simulate clone and checkout by creating ``files`` in the clone"""

    def run(cmd: list[str], cwd: Path | None = None, **kwargs: Any) -> subprocess.CompletedProcess[str]:
        if cmd[1] == "clone":
            (Path(cmd[-1]) / ".git").mkdir(parents=True)
        elif cmd[1] == "checkout":
            assert cwd is not None
            for relative, content in files.items():
                path = Path(cwd) / relative
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content)
        return subprocess.CompletedProcess(cmd, 0, "", "")

    return run


class TestSparseFetch:
    """Tests for sparse_fetch"""

    def test_flattens_subfolder(self, tmp_path: Path) -> None:
        """Test that subfolder files end up flat in the output directory"""
        output_dir = tmp_path / "out"
        files = {
            "src/db/schema/users.ts": "users",
            "src/db/schema/posts.ts": "posts",
            "src/db/schema/nested/ignored.ts": "nested",
        }

        with patch("core.sources.git.subprocess.run", side_effect=fake_git(files)) as mock_run:
            fetched = sparse_fetch(REPO, "src/db/schema", output_dir)

        assert [path.name for path in fetched] == ["posts.ts", "users.ts"]
        assert sorted(path.name for path in output_dir.iterdir()) == ["posts.ts", "users.ts"]
        assert (output_dir / "users.ts").read_text() == "users"

        commands = [call.args[0] for call in mock_run.call_args_list]
        assert commands == [
            ["git", "clone", "--no-checkout", "--filter=blob:none", REPO, str(output_dir.resolve())],
            ["git", "sparse-checkout", "init", "--no-cone"],
            ["git", "sparse-checkout", "set", "src/db/schema"],
            ["git", "checkout"],
        ]
        assert all(call.kwargs["check"] is True for call in mock_run.call_args_list)

    def test_replaces_existing_output(self, tmp_path: Path) -> None:
        """Test that stale files in the output directory are removed"""
        output_dir = tmp_path / "out"
        output_dir.mkdir()
        (output_dir / "stale.js").write_text("old")

        with patch("core.sources.git.subprocess.run", side_effect=fake_git({"schema/a.ts": "a"})):
            sparse_fetch(REPO, "schema", output_dir)

        assert sorted(path.name for path in output_dir.iterdir()) == ["a.ts"]

    def test_missing_subfolder(self, tmp_path: Path) -> None:
        """Test that an absent subfolder is fatal"""
        with (
            patch("core.sources.git.subprocess.run", side_effect=fake_git({"other/a.ts": "a"})),
            pytest.raises(SubfolderNotFoundError, match="Repo subfolder not found: schema"),
        ):
            sparse_fetch(REPO, "schema", tmp_path / "out")

    def test_empty_subfolder_rejected(self, tmp_path: Path) -> None:
        """Test that the repository root is not a valid subfolder"""
        with patch("core.sources.git.subprocess.run") as mock_run, pytest.raises(ValueError):
            sparse_fetch(REPO, "/", tmp_path / "out")
        mock_run.assert_not_called()

    def test_git_failure_propagates(self, tmp_path: Path) -> None:
        """Test that git errors are not swallowed"""
        error = subprocess.CalledProcessError(128, ["git", "clone"], stderr="Repository not found")
        with (
            patch("core.sources.git.subprocess.run", side_effect=error),
            pytest.raises(subprocess.CalledProcessError),
        ):
            sparse_fetch(REPO, "schema", tmp_path / "out")
