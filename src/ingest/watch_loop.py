"""Polling driver for keyword series.

This module runs the fetch, merge, and emit cycle for every tracked
keyword at the configured cadence. Fetch failures skip the keyword for
one cycle and leave its series untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import IO, Callable, Protocol

from core.config import TrendStitchConfig
from core.errors import TrendFetchError
from core.logging_config import get_logger
from core.types import RawWindow
from store.keyword_store import KeywordStore
from store.series_output import write_series
from store.state_checkpoint import save_store_state

_LOGGER = get_logger(__name__)


class WindowSource(Protocol):
    """Anything that can fetch a raw window for a keyword."""

    def fetch_window(self, keyword: str) -> RawWindow:
        """Fetch one raw window."""
        ...


@dataclass(frozen=True)
class CycleReport:
    """Outcome of one pass over every keyword.

    Attributes:
        merged: Keywords whose window was merged and emitted.
        failed: Keywords skipped because the fetch failed.
    """

    merged: tuple[str, ...]
    failed: tuple[str, ...]


def run_cycle(
    store: KeywordStore,
    source: WindowSource,
    config: TrendStitchConfig,
    stream: IO[str],
    sleep: Callable[[float], None] = time.sleep,
) -> CycleReport:
    """Fetch, merge, and emit every keyword once.

    Args:
        store: Series owner.
        source: Window source, usually ``TrendsClient``.
        config: Runtime configuration.
        stream: Output stream for series records.
        sleep: Sleep function, injectable for tests.

    Returns:
        Per-keyword cycle outcome.
    """
    merged: list[str] = []
    failed: list[str] = []
    keywords = store.keywords()
    for index, keyword in enumerate(keywords):
        try:
            window = source.fetch_window(keyword)
        except TrendFetchError as error:
            _LOGGER.error("trend_fetch_failed", keyword=keyword, error=str(error))
            failed.append(keyword)
        else:
            outcome = store.merge(keyword, window)
            _LOGGER.info(
                "window_merged",
                keyword=keyword,
                first_ingest=outcome.first_ingest,
                scale=round(outcome.scale, 6),
                inserted=outcome.inserted,
                overwritten=outcome.overwritten,
                fallback_points=outcome.fallback_points,
                pruned=outcome.pruned,
            )
            write_series(keyword, store, stream)
            merged.append(keyword)
        if index < len(keywords) - 1 and config.keyword_pause_seconds > 0:
            sleep(config.keyword_pause_seconds)
    return CycleReport(merged=tuple(merged), failed=tuple(failed))


def run_watch(
    store: KeywordStore,
    source: WindowSource,
    config: TrendStitchConfig,
    stream: IO[str],
    max_cycles: int | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Run keyword cycles until ``max_cycles`` is reached.

    Args:
        store: Series owner.
        source: Window source.
        config: Runtime configuration.
        stream: Output stream for series records.
        max_cycles: Optional cycle limit. ``None`` loops forever.
        sleep: Sleep function, injectable for tests.

    Returns:
        Number of completed cycles.
    """
    completed = 0
    _LOGGER.info(
        "watch_started",
        keywords=list(store.keywords()),
        geo=config.geo,
        timeframe=config.timeframe,
        cycle_interval_minutes=config.cycle_interval_minutes,
    )
    while max_cycles is None or completed < max_cycles:
        report = run_cycle(store, source, config, stream, sleep)
        completed += 1
        if config.state_file is not None:
            save_store_state(config.state_file, store)
        _LOGGER.info(
            "watch_cycle_completed",
            cycle=completed,
            merged=len(report.merged),
            failed=len(report.failed),
        )
        if max_cycles is not None and completed >= max_cycles:
            break
        sleep(config.cycle_interval_minutes * 60)
    return completed
