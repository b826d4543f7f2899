"""Recorded window reader for offline stitching.

This module loads previously captured raw windows from JSONL files so
the stitch engine can be replayed without contacting the trends source.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any

from core.errors import TrendFetchError
from core.types import RawWindow
from ingest.trends_client import parse_raw_points


@dataclass(frozen=True)
class RecordedWindow:
    """One captured query result.

    Attributes:
        keyword: Keyword the window was fetched for.
        window: Raw window payload.
    """

    keyword: str
    window: RawWindow


def read_recorded_windows(source_path: Path) -> list[RecordedWindow]:
    """Read recorded windows in file order.

    Each line holds ``{"keyword": str, "points": [[timestamp, value], ...]}``.

    Args:
        source_path: JSONL file path.

    Returns:
        Recorded windows in the order they were captured.

    Raises:
        TrendFetchError: If the file is missing or a line is malformed.
    """
    if not source_path.is_file():
        raise TrendFetchError(
            f"Failed to read recorded windows at {source_path}: file does not exist. "
            "Provide an existing JSONL file."
        )
    windows: list[RecordedWindow] = []
    lines = source_path.read_text(encoding="utf-8").splitlines()
    for line_number, line in enumerate(lines, 1):
        if not line.strip():
            continue
        payload = _parse_line(source_path, line, line_number)
        windows.append(_parse_window(source_path, payload, line_number))
    return windows


def _parse_line(source_path: Path, line: str, line_number: int) -> Any:
    try:
        return json.loads(line)
    except json.JSONDecodeError as error:
        raise TrendFetchError(
            f"Failed to parse recorded window at {source_path}:{line_number}: {error.msg}."
        ) from error


def _parse_window(source_path: Path, payload: Any, line_number: int) -> RecordedWindow:
    keyword = payload.get("keyword") if isinstance(payload, dict) else None
    points = payload.get("points") if isinstance(payload, dict) else None
    if not isinstance(keyword, str) or not keyword.strip() or not isinstance(points, list):
        raise TrendFetchError(
            f"Invalid recorded window at {source_path}:{line_number}. "
            "Expected fields 'keyword' (string) and 'points' (list of [timestamp, value])."
        )
    if not points:
        raise TrendFetchError(
            f"Recorded window at {source_path}:{line_number} has no points. "
            "An empty window is a failed fetch; drop the line instead of replaying it."
        )
    pairs = []
    for point in points:
        if not isinstance(point, list) or len(point) != 2:
            raise TrendFetchError(
                f"Invalid point {point!r} at {source_path}:{line_number}. "
                "Each point must be a [timestamp, value] pair."
            )
        pairs.append((point[0], point[1]))
    return RecordedWindow(keyword=keyword.strip(), window=parse_raw_points(pairs))
