"""Trendstitch exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class TrendStitchError(Exception):
    """Base exception for all Trendstitch failures."""


class TrendStitchConfigError(TrendStitchError):
    """Raised for invalid runtime configuration."""


class UnknownKeywordError(TrendStitchError):
    """Raised when a keyword was never registered with the store."""


class TrendFetchError(TrendStitchError):
    """Raised when the trends source fails or returns a malformed window."""


class TrendStateError(TrendStitchError):
    """Raised for unreadable or invalid state checkpoints."""


class WatchSpecError(TrendStitchError):
    """Raised for invalid or unsupported watch-list files."""
