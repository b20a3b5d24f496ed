"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest

from shadowmark.config import Settings
from shadowmark.store import MarkerStore


@pytest.fixture
def tmp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings(tmp_dir: Path) -> Settings:
    """Settings pointing marker storage at a temporary directory."""
    return Settings(storage_dir=tmp_dir / "markers")


@pytest.fixture
def store(settings: Settings) -> MarkerStore:
    """Marker store backed by a temporary directory."""
    return MarkerStore(settings)
