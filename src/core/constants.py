"""Core constants used across Trendstitch modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_GEO = "US"
DEFAULT_TIMEFRAME = "now 4-H"
DEFAULT_LANGUAGE = "en-US"
DEFAULT_TZ_OFFSET_MINUTES = 0
DEFAULT_CATEGORY = 0
DEFAULT_CYCLE_INTERVAL_MINUTES = 10.0
DEFAULT_KEYWORD_PAUSE_SECONDS = 1.0
DEFAULT_FETCH_RETRIES = 3
DEFAULT_RETRY_BASE_SECONDS = 2.0
DEFAULT_RETRY_CAP_SECONDS = 60.0
DEFAULT_RETRY_JITTER_FRACTION = 0.1
NO_SCALE = 0.0
PARTIAL_COLUMN_NAME = "isPartial"
STATE_FILE_VERSION = 1
WATCH_SPEC_VERSION = 1
