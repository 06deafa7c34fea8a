"""Tests for local schema file reading"""

from pathlib import Path

import pytest

from core.sources.local import list_schema_files, read_schema_files, read_schema_path


class TestListSchemaFiles:
    """Tests for list_schema_files"""

    def test_sorted_and_filtered(self, tmp_path: Path) -> None:
        """Test that only matching files directly in the directory are listed"""
        (tmp_path / "users.ts").write_text("")
        (tmp_path / "accounts.ts").write_text("")
        (tmp_path / "notes.md").write_text("")
        (tmp_path / "nested").mkdir()
        (tmp_path / "nested" / "deep.ts").write_text("")

        assert [path.name for path in list_schema_files(tmp_path)] == ["accounts.ts", "users.ts"]

    def test_custom_extension(self, tmp_path: Path) -> None:
        """Test listing with another extension"""
        (tmp_path / "a.mts").write_text("")
        (tmp_path / "b.ts").write_text("")
        assert [path.name for path in list_schema_files(tmp_path, ".mts")] == ["a.mts"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Test that a missing directory raises FileNotFoundError"""
        with pytest.raises(FileNotFoundError, match="Schema directory not found"):
            list_schema_files(tmp_path / "missing")


class TestReadSchemaFiles:
    """Tests for reading sources"""

    def test_read_directory(self, schema_dir: Path) -> None:
        """Test that files are read with absolute names"""
        files = read_schema_files(schema_dir)

        assert [Path(f.file_name).name for f in files] == ["posts.ts", "users.ts"]
        assert all(Path(f.file_name).is_absolute() for f in files)
        assert "pgTable" in files[0].content

    def test_read_single_file(self, schema_dir: Path) -> None:
        """Test that a file path yields just that file"""
        files = read_schema_path(schema_dir / "users.ts")
        assert len(files) == 1
        assert files[0].file_name == str((schema_dir / "users.ts").resolve())

    def test_read_path_directory(self, schema_dir: Path) -> None:
        """Test that a directory path reads every schema file"""
        assert len(read_schema_path(schema_dir)) == 2
