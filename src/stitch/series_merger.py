"""In-place window merge for normalized series.

This module folds one raw window into a running normalized series.
It handles first ingest, the zero-valued edge cases, and pruning the
series down to the window the trends source still reports.
"""

from __future__ import annotations

import math

from core.constants import NO_SCALE
from core.logging_config import get_logger
from core.types import MergeOutcome, NormalizedSeries, RawWindow
from stitch.scale_estimator import estimate_scale

_LOGGER = get_logger(__name__)


def merge_window(existing: NormalizedSeries, incoming: RawWindow) -> MergeOutcome:
    """Merge a raw window into a normalized series in place.

    After the call the series covers exactly the timestamps of ``incoming``.
    Non-zero historical values are never replaced. A historical zero is
    replaced by the scaled raw value, or by the unscaled raw value when no
    scale could be estimated. That fallback point is not on the series'
    scale and is not corrected by later merges.

    Args:
        existing: Series to mutate.
        incoming: Raw window from the latest query.

    Returns:
        Merge summary for logging and tests.
    """
    if not existing:
        existing.update(incoming)
        return MergeOutcome(
            first_ingest=True,
            scale=NO_SCALE,
            inserted=len(incoming),
            overwritten=0,
            fallback_points=0,
            pruned=0,
        )
    scale = estimate_scale(existing, incoming)
    inserted = 0
    overwritten = 0
    fallback_points = 0
    for timestamp, raw_value in incoming.items():
        normalized_value = round_half_away_from_zero(raw_value * scale)
        if timestamp not in existing:
            existing[timestamp] = normalized_value
            inserted += 1
            continue
        if existing[timestamp] != 0 or raw_value == 0:
            continue
        if scale != NO_SCALE:
            existing[timestamp] = normalized_value
            overwritten += 1
        else:
            existing[timestamp] = raw_value
            fallback_points += 1
    pruned = prune_to_window(existing, incoming)
    if fallback_points:
        _LOGGER.warning(
            "scale_unavailable_raw_fallback",
            fallback_points=fallback_points,
            window_size=len(incoming),
        )
    return MergeOutcome(
        first_ingest=False,
        scale=scale,
        inserted=inserted,
        overwritten=overwritten,
        fallback_points=fallback_points,
        pruned=pruned,
    )


def prune_to_window(existing: NormalizedSeries, incoming: RawWindow) -> int:
    """Drop series timestamps the incoming window does not cover.

    Args:
        existing: Series to mutate.
        incoming: Window whose key set bounds the series.

    Returns:
        Number of removed timestamps.
    """
    stale_timestamps = [timestamp for timestamp in existing if timestamp not in incoming]
    for timestamp in stale_timestamps:
        del existing[timestamp]
    return len(stale_timestamps)


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero.

    Python's ``round`` uses banker's rounding, which would pull
    ``2.5 -> 2``; series values use ``2.5 -> 3`` instead.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
