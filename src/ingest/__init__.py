"""Trends window acquisition and polling.

This module fetches raw windows from the trends source, validates them,
and drives the periodic fetch, merge, and emit cycle per keyword.
"""
