"""JSONL rendering for stitched series.

This module turns store snapshots into ``TrendPoint`` records and
serializes them one JSON object per line for downstream consumers.
"""

from __future__ import annotations

import json
from typing import IO, Iterable, Iterator

from core.types import TrendPoint
from store.keyword_store import KeywordStore


def build_trend_points(keyword: str, store: KeywordStore) -> list[TrendPoint]:
    """Build ordered output records for one keyword.

    Args:
        keyword: Registered keyword.
        store: Series owner.

    Returns:
        Records ascending by timestamp.
    """
    return [
        TrendPoint(keyword=keyword, timestamp=timestamp, value=value)
        for timestamp, value in store.snapshot_sorted(keyword)
    ]


def trend_point_to_payload(point: TrendPoint) -> dict[str, object]:
    """Serialize a TrendPoint into a JSON-safe payload."""
    return {"keyword": point.keyword, "timestamp": point.timestamp, "value": point.value}


def render_series_lines(keyword: str, store: KeywordStore) -> Iterator[str]:
    """Yield one JSON line per point of a keyword's series."""
    for point in build_trend_points(keyword, store):
        yield json.dumps(trend_point_to_payload(point), ensure_ascii=False)


def write_series(keyword: str, store: KeywordStore, stream: IO[str]) -> int:
    """Write a keyword's series followed by a blank separator line.

    Args:
        keyword: Registered keyword.
        store: Series owner.
        stream: Text stream, usually stdout.

    Returns:
        Number of records written.
    """
    written = _write_lines(render_series_lines(keyword, store), stream)
    stream.write("\n")
    stream.flush()
    return written


def _write_lines(lines: Iterable[str], stream: IO[str]) -> int:
    count = 0
    for line in lines:
        stream.write(line + "\n")
        count += 1
    return count
