"""Unit tests for recorded window loading."""

from __future__ import annotations

import pytest

from core.errors import TrendFetchError
from ingest.window_replay import read_recorded_windows


def test_read_recorded_windows_keeps_file_order(fixtures_dir) -> None:
    """Windows are returned in capture order."""
    windows = read_recorded_windows(fixtures_dir / "windows" / "two_keywords.jsonl")

    assert [window.keyword for window in windows] == ["bitcoin", "ethereum", "bitcoin", "ethereum"]


def test_read_recorded_windows_parses_points(fixtures_dir) -> None:
    """Point pairs become a timestamp-keyed window."""
    windows = read_recorded_windows(fixtures_dir / "windows" / "two_keywords.jsonl")

    assert windows[0].window == {100: 50, 200: 40, 300: 0}


def test_read_recorded_windows_rejects_bad_timestamp(fixtures_dir) -> None:
    """Malformed timestamps are fetch errors."""
    with pytest.raises(TrendFetchError):
        read_recorded_windows(fixtures_dir / "windows" / "bad_timestamp.jsonl")


def test_read_recorded_windows_missing_file(tmp_path) -> None:
    """A missing file is reported with its path."""
    with pytest.raises(TrendFetchError):
        read_recorded_windows(tmp_path / "absent.jsonl")


def test_read_recorded_windows_rejects_missing_points(tmp_path) -> None:
    """Each line needs a keyword and a points list."""
    source_path = tmp_path / "windows.jsonl"
    source_path.write_text('{"keyword": "bitcoin"}\n', encoding="utf-8")

    with pytest.raises(TrendFetchError):
        read_recorded_windows(source_path)


def test_read_recorded_windows_rejects_empty_points(tmp_path) -> None:
    """An empty window must not reach the merger and wipe the established scale."""
    source_path = tmp_path / "windows.jsonl"
    source_path.write_text(
        '{"keyword": "bitcoin", "points": [[100, 50], [200, 40]]}\n'
        '{"keyword": "bitcoin", "points": []}\n'
        '{"keyword": "bitcoin", "points": [[200, 10], [300, 10]]}\n',
        encoding="utf-8",
    )

    with pytest.raises(TrendFetchError, match=":2 has no points"):
        read_recorded_windows(source_path)
