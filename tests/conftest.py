"""Shared test fixtures and configuration."""

import sys
from pathlib import Path

# Add xml_validator/ to Python path so `from xmlvalidator.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "xml_validator"))

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def person_schema_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "person.xsd"


@pytest.fixture
def valid_person_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "person_valid.xml"


@pytest.fixture
def invalid_person_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "person_invalid.xml"


@pytest.fixture
def isolated_tmp(tmp_path: Path) -> Path:
    """A private temp directory so tests can list exactly what was created."""
    tmp = tmp_path / "tmp"
    tmp.mkdir()
    return tmp
