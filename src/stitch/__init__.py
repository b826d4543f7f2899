"""Series stitching engine.

This module rescales independently-normalized trend windows onto one
consistent scale and merges them into a bounded rolling series.
"""
