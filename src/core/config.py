"""Runtime configuration model for Trendstitch.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import os
from pathlib import Path

from core.constants import (
    DEFAULT_CYCLE_INTERVAL_MINUTES,
    DEFAULT_FETCH_RETRIES,
    DEFAULT_GEO,
    DEFAULT_KEYWORD_PAUSE_SECONDS,
    DEFAULT_LANGUAGE,
    DEFAULT_TIMEFRAME,
    DEFAULT_TZ_OFFSET_MINUTES,
)
from core.errors import TrendStitchConfigError


@dataclass(frozen=True)
class TrendStitchConfig:
    """Validated runtime configuration.

    Attributes:
        geo: Trends geography code, e.g. ``US``.
        timeframe: Trends timeframe for each windowed query.
        language: Host language sent with each query.
        tz_offset_minutes: Timezone offset passed to the trends client.
        cycle_interval_minutes: Pause between full keyword cycles.
        keyword_pause_seconds: Pause between two keyword queries.
        fetch_retries: Attempts per query before giving up.
        state_file: Optional JSON checkpoint path for the stitched series.
    """

    geo: str
    timeframe: str
    language: str
    tz_offset_minutes: int
    cycle_interval_minutes: float
    keyword_pause_seconds: float
    fetch_retries: int
    state_file: Path | None

    @classmethod
    def from_env(cls) -> "TrendStitchConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TrendStitchConfigError: If environment values are invalid.
        """
        state_file_value = os.getenv("TRENDSTITCH_STATE_FILE")
        return cls(
            geo=os.getenv("TRENDSTITCH_GEO", DEFAULT_GEO).strip().upper(),
            timeframe=os.getenv("TRENDSTITCH_TIMEFRAME", DEFAULT_TIMEFRAME).strip(),
            language=os.getenv("TRENDSTITCH_LANGUAGE", DEFAULT_LANGUAGE).strip(),
            tz_offset_minutes=_parse_int(
                "TRENDSTITCH_TZ_OFFSET",
                os.getenv("TRENDSTITCH_TZ_OFFSET", str(DEFAULT_TZ_OFFSET_MINUTES)),
            ),
            cycle_interval_minutes=_parse_non_negative_float(
                "TRENDSTITCH_CYCLE_MINUTES",
                os.getenv("TRENDSTITCH_CYCLE_MINUTES", str(DEFAULT_CYCLE_INTERVAL_MINUTES)),
            ),
            keyword_pause_seconds=_parse_non_negative_float(
                "TRENDSTITCH_KEYWORD_PAUSE_SECONDS",
                os.getenv(
                    "TRENDSTITCH_KEYWORD_PAUSE_SECONDS", str(DEFAULT_KEYWORD_PAUSE_SECONDS)
                ),
            ),
            fetch_retries=_parse_positive_int(
                "TRENDSTITCH_FETCH_RETRIES",
                os.getenv("TRENDSTITCH_FETCH_RETRIES", str(DEFAULT_FETCH_RETRIES)),
            ),
            state_file=Path(state_file_value).expanduser().resolve()
            if state_file_value
            else None,
        )


def _parse_int(variable_name: str, raw_value: str) -> int:
    """Parse an integer environment value.

    Args:
        variable_name: Environment variable name for error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        TrendStitchConfigError: If value cannot be parsed into int.
    """
    try:
        return int(raw_value)
    except ValueError as error:
        raise TrendStitchConfigError(
            f"Invalid {variable_name} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {variable_name} to a numeric value."
        ) from error


def _parse_positive_int(variable_name: str, raw_value: str) -> int:
    value = _parse_int(variable_name, raw_value)
    if value < 1:
        raise TrendStitchConfigError(
            f"Invalid {variable_name} value: expected at least 1, got {value}."
        )
    return value


def _parse_non_negative_float(variable_name: str, raw_value: str) -> float:
    """Parse a non-negative duration environment value."""
    try:
        value = float(raw_value)
    except ValueError as error:
        raise TrendStitchConfigError(
            f"Invalid {variable_name} value: "
            f"expected a number, got '{raw_value}'. "
            f"Set {variable_name} to a non-negative duration."
        ) from error
    if not math.isfinite(value) or value < 0:
        raise TrendStitchConfigError(
            f"Invalid {variable_name} value: expected a finite non-negative duration, "
            f"got {raw_value!r}. Set {variable_name} to a number such as 10."
        )
    return value
