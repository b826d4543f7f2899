"""Stitched series checkpoint persistence.

This module saves and restores keyword series as one JSON document
so a restarted watcher keeps merging on the established scale.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from core.constants import STATE_FILE_VERSION
from core.errors import TrendStateError
from core.logging_config import get_logger
from store.keyword_store import KeywordStore

_LOGGER = get_logger(__name__)


def save_store_state(state_path: Path, store: KeywordStore) -> None:
    """Write every registered series to a JSON checkpoint.

    The document is written to a sibling temp file and renamed, so a
    crash mid-write leaves the previous checkpoint intact.

    Args:
        state_path: Checkpoint file path.
        store: Series owner.
    """
    payload = {
        "version": STATE_FILE_VERSION,
        "series": {
            keyword: {str(timestamp): value for timestamp, value in store.snapshot_sorted(keyword)}
            for keyword in store.keywords()
        },
    }
    state_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = state_path.with_name(state_path.name + ".tmp")
    temp_path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    temp_path.replace(state_path)


def load_store_state(state_path: Path, store: KeywordStore) -> int:
    """Restore registered keyword series from a JSON checkpoint.

    Keywords in the checkpoint that the store does not track are skipped.

    Args:
        state_path: Checkpoint file path.
        store: Series owner to populate.

    Returns:
        Number of keywords restored. Zero when no checkpoint exists.

    Raises:
        TrendStateError: If the checkpoint is unreadable or malformed.
    """
    if not state_path.exists():
        return 0
    payload = _read_payload(state_path)
    series_payload = _expect_series_mapping(state_path, payload)
    restored = 0
    registered = set(store.keywords())
    for keyword, points in series_payload.items():
        if keyword not in registered:
            _LOGGER.info("state_keyword_skipped", keyword=keyword, state_path=str(state_path))
            continue
        store.restore(keyword, _parse_points(state_path, keyword, points))
        restored += 1
    _LOGGER.info("state_restored", keywords=restored, state_path=str(state_path))
    return restored


def _read_payload(state_path: Path) -> Any:
    try:
        return json.loads(state_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as error:
        raise TrendStateError(
            f"Failed to read state checkpoint at {state_path}: {error}. "
            "Delete the checkpoint file to start from a fresh series."
        ) from error


def _expect_series_mapping(state_path: Path, payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, dict) or payload.get("version") != STATE_FILE_VERSION:
        raise TrendStateError(
            f"Unsupported state checkpoint at {state_path}: "
            f"expected an object with version {STATE_FILE_VERSION}."
        )
    series_payload = payload.get("series")
    if not isinstance(series_payload, dict):
        raise TrendStateError(
            f"Invalid state checkpoint at {state_path}: field 'series' must be an object."
        )
    return series_payload


def _parse_points(state_path: Path, keyword: str, points: Any) -> list[tuple[int, int]]:
    if not isinstance(points, dict):
        raise TrendStateError(
            f"Invalid state checkpoint at {state_path}: series for '{keyword}' must be an object."
        )
    parsed_points: list[tuple[int, int]] = []
    for raw_timestamp, raw_value in points.items():
        try:
            timestamp = int(raw_timestamp)
        except ValueError as error:
            raise TrendStateError(
                f"Invalid timestamp '{raw_timestamp}' for '{keyword}' in {state_path}."
            ) from error
        if isinstance(raw_value, bool) or not isinstance(raw_value, int) or raw_value < 0:
            raise TrendStateError(
                f"Invalid value {raw_value!r} at {raw_timestamp} for '{keyword}' in {state_path}."
            )
        parsed_points.append((timestamp, raw_value))
    return parsed_points
