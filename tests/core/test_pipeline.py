"""Tests for directory-level conversion runs"""

from pathlib import Path
from unittest.mock import patch

import pytest

from core.pipeline import convert_local_schemas, fetch_and_convert_schemas
from core.schema.parser import SchemaParseError


class TestConvertLocalSchemas:
    """Tests for local conversion"""

    def test_writes_outputs_and_keeps_inputs(self, copied_schema_dir: Path, tmp_path: Path) -> None:
        """Test that outputs are written and inputs are left alone"""
        output_dir = tmp_path / "entities"

        summary = convert_local_schemas(copied_schema_dir, output_dir)

        assert summary.mode == "local"
        assert summary.files_converted == 2
        assert sorted(Path(path).name for path in summary.outputs) == ["posts.js", "users.js"]
        assert (output_dir / "users.js").read_text().startswith("const typeorm = require('typeorm');")
        assert sorted(path.name for path in copied_schema_dir.iterdir()) == ["posts.ts", "users.ts"]

    def test_output_extension(self, copied_schema_dir: Path, tmp_path: Path) -> None:
        """Test a custom output extension"""
        summary = convert_local_schemas(copied_schema_dir, tmp_path / "out", output_extension=".cjs")
        assert all(path.endswith(".cjs") for path in summary.outputs)

    def test_no_files(self, tmp_path: Path) -> None:
        """Test an empty input directory"""
        (tmp_path / "in").mkdir()
        summary = convert_local_schemas(tmp_path / "in", tmp_path / "out")
        assert summary.files_converted == 0
        assert summary.outputs == []

    def test_parse_error_writes_nothing(self, copied_schema_dir: Path, tmp_path: Path) -> None:
        """Test that a failing batch leaves the output directory empty"""
        (copied_schema_dir / "zz_broken.ts").write_text('export const x = pgTable("x", {')
        output_dir = tmp_path / "out"

        with pytest.raises(SchemaParseError):
            convert_local_schemas(copied_schema_dir, output_dir)

        assert list(output_dir.iterdir()) == []


class TestFetchAndConvertSchemas:
    """Tests for Git conversion"""

    def test_converts_and_removes_sources(self, schema_dir: Path, tmp_path: Path) -> None:
        """Test that fetched sources are replaced by their outputs"""
        output_dir = tmp_path / "entities"

        def fake_fetch(repo_url: str, subfolder: str, target: Path) -> list[Path]:
            target.mkdir(parents=True)
            for path in schema_dir.glob("*.ts"):
                (target / path.name).write_text(path.read_text())
            return sorted(target.iterdir())

        with patch("core.pipeline.sparse_fetch", side_effect=fake_fetch) as mock_fetch:
            summary = fetch_and_convert_schemas("https://example.com/repo.git", "db/schema", output_dir)

        mock_fetch.assert_called_once_with("https://example.com/repo.git", "db/schema", output_dir.resolve())
        assert summary.mode == "git"
        assert summary.files_converted == 2
        assert sorted(path.name for path in output_dir.iterdir()) == ["posts.js", "users.js"]

    def test_parse_error_keeps_sources(self, tmp_path: Path) -> None:
        """Test that sources survive a failed conversion"""
        output_dir = tmp_path / "entities"

        def fake_fetch(repo_url: str, subfolder: str, target: Path) -> list[Path]:
            target.mkdir(parents=True)
            (target / "broken.ts").write_text("export const = ;")
            return [target / "broken.ts"]

        with patch("core.pipeline.sparse_fetch", side_effect=fake_fetch), pytest.raises(SchemaParseError):
            fetch_and_convert_schemas("https://example.com/repo.git", "db", output_dir)

        assert (output_dir / "broken.ts").exists()
