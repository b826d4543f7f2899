"""Shared typed models.

This module defines the series aliases and immutable records used by
the stitch engine, the keyword store, the trends client, and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

RawWindow = Mapping[int, int]
NormalizedSeries = dict[int, int]


@dataclass(frozen=True)
class TrendPoint:
    """One stitched output record.

    Attributes:
        keyword: Tracked search phrase.
        timestamp: Unix epoch seconds.
        value: Interest on the series' consistent scale.
    """

    keyword: str
    timestamp: int
    value: int


@dataclass(frozen=True)
class MergeOutcome:
    """Summary of one window merge.

    Attributes:
        first_ingest: True when the window seeded an empty series.
        scale: Estimated scale factor, ``0.0`` when no overlap qualified.
        inserted: New timestamps added to the series.
        overwritten: Zero-valued points replaced by scaled values.
        fallback_points: Zero-valued points replaced by unscaled raw values.
        pruned: Timestamps dropped because the window no longer covers them.
    """

    first_ingest: bool
    scale: float
    inserted: int
    overwritten: int
    fallback_points: int
    pruned: int


@dataclass(frozen=True)
class WindowQuery:
    """Parameters for one windowed trends query.

    Attributes:
        keyword: Search phrase to query.
        geo: Geography code.
        timeframe: Trends timeframe expression.
        category: Trends category id, ``0`` for all categories.
    """

    keyword: str
    geo: str
    timeframe: str
    category: int = 0


@dataclass(frozen=True)
class WatchOptions:
    """Watch command options.

    Attributes:
        keywords: Keywords to track, in query order.
        max_cycles: Optional cycle limit, loop forever when omitted.
    """

    keywords: tuple[str, ...]
    max_cycles: int | None = None
