"""Public SDK surface for Trendstitch.

This module provides a stable import path for library users.
It re-exports the stitch engine, store, client, and typed models.
"""

from __future__ import annotations

from core.config import TrendStitchConfig
from core.errors import (
    TrendFetchError,
    TrendStateError,
    TrendStitchConfigError,
    TrendStitchError,
    UnknownKeywordError,
    WatchSpecError,
)
from core.types import MergeOutcome, TrendPoint, WatchOptions
from core.watch_spec import load_watch_spec
from ingest.trends_client import TrendsClient, parse_raw_points
from ingest.watch_loop import run_cycle, run_watch
from stitch.scale_estimator import estimate_scale
from stitch.series_merger import merge_window
from store.keyword_store import KeywordStore
from store.series_output import build_trend_points, render_series_lines
from store.state_checkpoint import load_store_state, save_store_state

__all__ = [
    "KeywordStore",
    "MergeOutcome",
    "TrendFetchError",
    "TrendPoint",
    "TrendStateError",
    "TrendStitchConfig",
    "TrendStitchConfigError",
    "TrendStitchError",
    "TrendsClient",
    "UnknownKeywordError",
    "WatchOptions",
    "WatchSpecError",
    "build_trend_points",
    "estimate_scale",
    "load_store_state",
    "load_watch_spec",
    "merge_window",
    "parse_raw_points",
    "render_series_lines",
    "run_cycle",
    "run_watch",
    "save_store_state",
]
