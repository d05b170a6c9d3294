"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules, most notably
a small local repository (see sample_repository.build_repository).
"""

from datetime import datetime
from pathlib import Path

import pytest
from sample_repository import RepositoryFixture, build_repository


@pytest.fixture
def now() -> datetime:
    """Reference time at noon, away from calendar-day boundaries."""
    return datetime.now().replace(hour=12, minute=0, second=0, microsecond=0)


@pytest.fixture
def repository(tmp_path: Path, now: datetime) -> RepositoryFixture:
    """Sample local repository with seven artifacts of known age."""
    return build_repository(tmp_path / "repository", now)


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory for every test."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home
