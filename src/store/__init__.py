"""Series ownership and persistence layer.

This module owns one normalized series per tracked keyword and
provides ordered snapshots, JSONL rendering, and state checkpoints.
"""
