"""Google Trends window client.

This module issues one windowed interest-over-time query per keyword
through pytrends and converts the response into a validated raw window.
Failures surface as ``TrendFetchError`` and never as a zero-filled window,
so the stitch engine cannot mistake a failed fetch for "no interest".
"""

from __future__ import annotations

import math
from numbers import Integral, Real
import time
from typing import Any, Callable, Iterable

import pandas as pd
from pytrends.exceptions import ResponseError
from pytrends.request import TrendReq
from requests.exceptions import RequestException

from core.config import TrendStitchConfig
from core.constants import (
    DEFAULT_CATEGORY,
    DEFAULT_RETRY_BASE_SECONDS,
    DEFAULT_RETRY_CAP_SECONDS,
    DEFAULT_RETRY_JITTER_FRACTION,
    PARTIAL_COLUMN_NAME,
)
from core.errors import TrendFetchError
from core.logging_config import get_logger
from core.types import RawWindow, WindowQuery
from ingest.fetch_retry import with_retries

_LOGGER = get_logger(__name__)

MAX_RAW_INTENSITY = 100


class TrendsClient:
    """Windowed interest-over-time client backed by pytrends."""

    def __init__(
        self,
        config: TrendStitchConfig,
        request_factory: Callable[..., Any] = TrendReq,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Create a trends client.

        Args:
            config: Runtime configuration with query defaults.
            request_factory: pytrends ``TrendReq`` compatible factory.
            sleep: Sleep function used between retries.
        """
        self._config = config
        self._sleep = sleep
        self._request = request_factory(hl=config.language, tz=config.tz_offset_minutes)

    def build_query(self, keyword: str) -> WindowQuery:
        """Build the windowed query for a keyword from config defaults."""
        return WindowQuery(
            keyword=keyword,
            geo=self._config.geo,
            timeframe=self._config.timeframe,
            category=DEFAULT_CATEGORY,
        )

    def fetch_window(self, keyword: str) -> RawWindow:
        """Fetch and validate one raw window for a keyword.

        Args:
            keyword: Search phrase to query.

        Returns:
            Mapping of epoch seconds to raw intensity in ``[0, 100]``.

        Raises:
            TrendFetchError: If the query fails or the payload is malformed.
        """
        query = self.build_query(keyword)
        try:
            frame = with_retries(
                lambda: self._query_frame(query),
                max_attempts=self._config.fetch_retries,
                base_seconds=DEFAULT_RETRY_BASE_SECONDS,
                cap_seconds=DEFAULT_RETRY_CAP_SECONDS,
                retry_on=(ResponseError, RequestException),
                jitter_fraction=DEFAULT_RETRY_JITTER_FRACTION,
                sleep=self._sleep,
            )
        except (ResponseError, RequestException) as error:
            raise TrendFetchError(
                f"Trends query failed for '{keyword}' "
                f"(geo={query.geo}, timeframe={query.timeframe}): {error}. "
                "The source may be rate limiting; retry on the next cycle."
            ) from error
        window = window_from_frame(frame, keyword)
        _LOGGER.debug("trend_window_fetched", keyword=keyword, points=len(window))
        return window

    def _query_frame(self, query: WindowQuery) -> Any:
        self._request.build_payload(
            [query.keyword],
            cat=query.category,
            timeframe=query.timeframe,
            geo=query.geo,
            gprop="",
        )
        return self._request.interest_over_time()


def window_from_frame(frame: Any, keyword: str) -> RawWindow:
    """Convert a pytrends interest-over-time frame into a raw window.

    Args:
        frame: DataFrame indexed by datetime with one column per keyword.
        keyword: Column to extract.

    Returns:
        Validated raw window.

    Raises:
        TrendFetchError: If the frame is empty, lacks the keyword column,
            or holds missing values.
    """
    if frame is None or frame.empty:
        raise TrendFetchError(
            f"Trends source returned no data for '{keyword}'. "
            "Treating the response as a failed fetch, not as zero interest."
        )
    if keyword not in frame.columns:
        raise TrendFetchError(
            f"Trends response for '{keyword}' has no matching column. "
            f"Columns: {', '.join(str(column) for column in frame.columns)}."
        )
    values = frame.drop(columns=[PARTIAL_COLUMN_NAME], errors="ignore")[keyword]
    if values.isna().any():
        raise TrendFetchError(
            f"Trends response for '{keyword}' contains missing values. "
            "Refusing to substitute zeros for missing readings."
        )
    points = [(pd.Timestamp(stamp), value) for stamp, value in values.items()]
    return parse_raw_points((_epoch_seconds(stamp), value) for stamp, value in points)


def parse_raw_points(points: Iterable[tuple[object, object]]) -> RawWindow:
    """Validate ``(timestamp, value)`` pairs into a raw window.

    Timestamps may be integers or numeric strings. Values must be integral
    and inside the source's native ``[0, 100]`` range. A repeated timestamp
    keeps its last value.

    Args:
        points: Raw pairs from the trends source.

    Returns:
        Mapping of epoch seconds to intensity.

    Raises:
        TrendFetchError: If a timestamp or value is malformed.
    """
    window: dict[int, int] = {}
    for raw_timestamp, raw_value in points:
        window[_parse_timestamp(raw_timestamp)] = _parse_intensity(raw_timestamp, raw_value)
    return window


def _epoch_seconds(stamp: pd.Timestamp) -> int:
    if stamp.tzinfo is None:
        stamp = stamp.tz_localize("UTC")
    return int(stamp.timestamp())


def _parse_timestamp(raw_timestamp: object) -> int:
    if isinstance(raw_timestamp, Integral) and not isinstance(raw_timestamp, bool):
        return int(raw_timestamp)
    if isinstance(raw_timestamp, str):
        try:
            return int(raw_timestamp.strip())
        except ValueError as error:
            raise TrendFetchError(
                f"Non-numeric timestamp '{raw_timestamp}' in trends response. "
                "Timestamps must be Unix epoch seconds."
            ) from error
    raise TrendFetchError(
        f"Unsupported timestamp {raw_timestamp!r} in trends response. "
        "Timestamps must be Unix epoch seconds."
    )


def _parse_intensity(raw_timestamp: object, raw_value: object) -> int:
    if isinstance(raw_value, bool) or not isinstance(raw_value, Real):
        raise TrendFetchError(
            f"Non-numeric interest {raw_value!r} at {raw_timestamp} in trends response."
        )
    numeric_value = float(raw_value)
    if math.isnan(numeric_value) or not numeric_value.is_integer():
        raise TrendFetchError(
            f"Non-integral interest {raw_value!r} at {raw_timestamp} in trends response."
        )
    value = int(numeric_value)
    if value < 0 or value > MAX_RAW_INTENSITY:
        raise TrendFetchError(
            f"Interest {value} at {raw_timestamp} is outside [0, {MAX_RAW_INTENSITY}]."
        )
    return value
