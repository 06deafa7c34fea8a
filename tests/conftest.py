"""Pytest configuration and shared fixtures"""

from pathlib import Path

import pytest

from core.models import SourceFile


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI config file at a temporary location"""
    config_path = tmp_path / "config" / "drizzle2typeorm.yaml"
    monkeypatch.setenv("DRIZZLE2TYPEORM_CONFIG", str(config_path))
    return config_path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def schema_dir(fixtures_dir: Path) -> Path:
    """Return the directory holding the sample schema files"""
    return fixtures_dir / "schema"


@pytest.fixture
def schema_files(schema_dir: Path) -> list[SourceFile]:
    """Return the sample schema files in processing order"""
    return [
        SourceFile(file_name=path.name, content=path.read_text(encoding="utf-8"))
        for path in (schema_dir / "users.ts", schema_dir / "posts.ts")
    ]


@pytest.fixture
def copied_schema_dir(tmp_path: Path, schema_dir: Path) -> Path:
    """Copy the sample schema files into a writable directory"""
    target = tmp_path / "schema"
    target.mkdir()
    for path in schema_dir.glob("*.ts"):
        (target / path.name).write_text(path.read_text(encoding="utf-8"), encoding="utf-8")
    return target
