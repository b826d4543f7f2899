"""Per-keyword normalized series store.

This module owns every stitched series for the lifetime of the process.
Merges for one keyword are serialized by that keyword's lock, while
different keywords never share state.
"""

from __future__ import annotations

import threading
from typing import Iterable

from core.errors import UnknownKeywordError
from core.types import MergeOutcome, NormalizedSeries, RawWindow
from stitch.series_merger import merge_window


class KeywordStore:
    """Registry of normalized series keyed by keyword."""

    def __init__(self, keywords: Iterable[str]) -> None:
        """Register a fixed keyword set.

        Args:
            keywords: Keywords to track. Duplicates collapse, order is kept.
        """
        self._keywords = tuple(dict.fromkeys(keywords))
        self._series: dict[str, NormalizedSeries] = {keyword: {} for keyword in self._keywords}
        self._locks: dict[str, threading.Lock] = {
            keyword: threading.Lock() for keyword in self._keywords
        }

    def keywords(self) -> tuple[str, ...]:
        """Return registered keywords in registration order."""
        return self._keywords

    def get(self, keyword: str) -> NormalizedSeries:
        """Return the live series for a keyword.

        Args:
            keyword: Registered keyword.

        Returns:
            Mutable series reference owned by this store.

        Raises:
            UnknownKeywordError: If the keyword was never registered.
        """
        series = self._series.get(keyword)
        if series is None:
            raise UnknownKeywordError(
                f"Keyword '{keyword}' is not registered. "
                f"Registered keywords: {', '.join(self._keywords) or '-'}."
            )
        return series

    def merge(self, keyword: str, window: RawWindow) -> MergeOutcome:
        """Merge a raw window into the keyword's series under its lock.

        Args:
            keyword: Registered keyword.
            window: Raw window from the latest query.

        Returns:
            Merge summary.

        Raises:
            UnknownKeywordError: If the keyword was never registered.
        """
        series = self.get(keyword)
        with self._locks[keyword]:
            return merge_window(series, window)

    def snapshot_sorted(self, keyword: str) -> list[tuple[int, int]]:
        """Return ``(timestamp, value)`` pairs in ascending timestamp order."""
        series = self.get(keyword)
        with self._locks[keyword]:
            return sorted(series.items())

    def restore(self, keyword: str, points: Iterable[tuple[int, int]]) -> None:
        """Replace a keyword's series with previously saved points."""
        series = self.get(keyword)
        with self._locks[keyword]:
            series.clear()
            series.update(points)
