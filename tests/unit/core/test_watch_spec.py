"""Unit tests for YAML watch-list parsing."""

from __future__ import annotations

import pytest

from core.config import TrendStitchConfig
from core.errors import WatchSpecError
from core.watch_spec import load_watch_spec


def test_load_watch_spec_dedupes_keywords(fixtures_dir) -> None:
    """Keywords keep first-seen order without duplicates."""
    watch_spec = load_watch_spec(str(fixtures_dir / "watch" / "valid_watch.yaml"))

    assert watch_spec.keywords == ("bitcoin", "machine learning")


def test_apply_defaults_overrides_env_config(fixtures_dir) -> None:
    """Watch-list defaults replace environment query settings."""
    watch_spec = load_watch_spec(str(fixtures_dir / "watch" / "valid_watch.yaml"))

    config = watch_spec.apply_defaults(TrendStitchConfig.from_env())

    assert (config.geo, config.timeframe, config.language) == ("GB", "now 1-H", "en-US")


def test_load_watch_spec_rejects_unknown_fields(fixtures_dir) -> None:
    """Unknown root fields fail fast."""
    with pytest.raises(WatchSpecError):
        load_watch_spec(str(fixtures_dir / "watch" / "unknown_field.yaml"))


def test_load_watch_spec_requires_keywords(fixtures_dir) -> None:
    """An empty keyword list is invalid."""
    with pytest.raises(WatchSpecError):
        load_watch_spec(str(fixtures_dir / "watch" / "no_keywords.yaml"))


def test_load_watch_spec_missing_file(tmp_path) -> None:
    """A missing file is a watch-list error."""
    with pytest.raises(WatchSpecError):
        load_watch_spec(str(tmp_path / "absent.yaml"))


def test_load_watch_spec_rejects_bad_version(tmp_path) -> None:
    """Only version 1 is supported."""
    spec_path = tmp_path / "watch.yaml"
    spec_path.write_text("version: 2\nkeywords: [bitcoin]\n", encoding="utf-8")

    with pytest.raises(WatchSpecError):
        load_watch_spec(str(spec_path))
