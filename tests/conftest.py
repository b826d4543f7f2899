"""Pytest configuration and shared fixtures for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def fixtures_dir() -> Path:
    """Absolute path of the tests/fixtures directory."""
    return Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer TRENDSTITCH_* variables out of test runs."""
    for variable_name in (
        "TRENDSTITCH_GEO",
        "TRENDSTITCH_TIMEFRAME",
        "TRENDSTITCH_LANGUAGE",
        "TRENDSTITCH_TZ_OFFSET",
        "TRENDSTITCH_CYCLE_MINUTES",
        "TRENDSTITCH_KEYWORD_PAUSE_SECONDS",
        "TRENDSTITCH_FETCH_RETRIES",
        "TRENDSTITCH_STATE_FILE",
    ):
        monkeypatch.delenv(variable_name, raising=False)
