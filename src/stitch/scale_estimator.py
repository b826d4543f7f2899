"""Overlap-based scale estimation.

This module derives the multiplicative factor that maps a freshly
fetched window onto the scale of an already normalized series.
"""

from __future__ import annotations

from core.constants import NO_SCALE
from core.types import RawWindow


def estimate_scale(existing: RawWindow, incoming: RawWindow) -> float:
    """Estimate the scale factor relating ``incoming`` to ``existing``.

    Only timestamps present in both inputs with a non-zero value on each
    side contribute. A zero reading is identical under every scale, so it
    carries no information about the ratio between windows.

    Args:
        existing: Normalized series, possibly empty.
        incoming: Raw window returned by one query.

    Returns:
        Arithmetic mean of ``existing[t] / incoming[t]`` over qualifying
        timestamps, or ``NO_SCALE`` (``0.0``) when none qualify.
    """
    ratio_sum = 0.0
    ratio_count = 0
    for timestamp, raw_value in incoming.items():
        existing_value = existing.get(timestamp)
        if not existing_value or not raw_value:
            continue
        ratio_sum += existing_value / raw_value
        ratio_count += 1
    if ratio_count == 0:
        return NO_SCALE
    return ratio_sum / ratio_count
