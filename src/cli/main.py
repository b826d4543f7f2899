"""Trendstitch CLI entry points.
This module exposes the watch and replay commands.
It maps argparse commands onto the store, client, and driver.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import math
from pathlib import Path
import sys
from typing import Any, Sequence

from core.config import TrendStitchConfig
from core.logging_config import LOG_LEVEL_CHOICES, set_log_level
from core.types import WatchOptions
from core.watch_spec import load_watch_spec
from ingest.trends_client import TrendsClient
from ingest.watch_loop import run_watch
from ingest.window_replay import read_recorded_windows
from store.keyword_store import KeywordStore
from store.series_output import write_series
from store.state_checkpoint import load_store_state, save_store_state


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="trendstitch",
        description="Stitch overlapping Google Trends windows into consistent series",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVEL_CHOICES,
        help="Minimum log level on stderr",
    )
    parser.add_argument("--state-file", help="Override TRENDSTITCH_STATE_FILE for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_watch_command(subparsers)
    _add_replay_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Trendstitch CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    set_log_level(args.log_level)
    config = _build_config(args.state_file)
    if args.command == "watch":
        return _run_watch_command(parser, config, args)
    if args.command == "replay":
        return _run_replay_command(config, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(state_file: str | None) -> TrendStitchConfig:
    """Build runtime config with optional state-file override."""
    config = TrendStitchConfig.from_env()
    if state_file:
        config = replace(config, state_file=Path(state_file).expanduser().resolve())
    return config


def _run_watch_command(
    parser: argparse.ArgumentParser,
    config: TrendStitchConfig,
    args: argparse.Namespace,
) -> int:
    """Handle watch command.

    Args:
        parser: Parser used to report usage errors.
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    keywords = list(args.keywords)
    if args.watch_file:
        watch_spec = load_watch_spec(args.watch_file)
        config = watch_spec.apply_defaults(config)
        keywords.extend(watch_spec.keywords)
    if not keywords:
        parser.error("watch requires at least one keyword or a --watch-file")
    config = _apply_watch_overrides(config, args)
    options = WatchOptions(keywords=tuple(dict.fromkeys(keywords)), max_cycles=args.max_cycles)
    store = KeywordStore(options.keywords)
    if config.state_file is not None:
        load_store_state(config.state_file, store)
    client = TrendsClient(config)
    run_watch(store, client, config, sys.stdout, max_cycles=options.max_cycles)
    return 0


def _run_replay_command(config: TrendStitchConfig, args: argparse.Namespace) -> int:
    """Handle replay command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    recorded_windows = read_recorded_windows(Path(args.source).expanduser())
    keywords = [recorded.keyword for recorded in recorded_windows]
    store = KeywordStore(keywords)
    if config.state_file is not None:
        load_store_state(config.state_file, store)
    for recorded in recorded_windows:
        store.merge(recorded.keyword, recorded.window)
    if config.state_file is not None:
        save_store_state(config.state_file, store)
    for keyword in store.keywords():
        write_series(keyword, store, sys.stdout)
    return 0


def _apply_watch_overrides(
    config: TrendStitchConfig,
    args: argparse.Namespace,
) -> TrendStitchConfig:
    """Apply explicit CLI flags on top of env and watch-list values."""
    overrides: dict[str, Any] = {}
    if args.geo:
        overrides["geo"] = args.geo.upper()
    if args.timeframe:
        overrides["timeframe"] = args.timeframe
    if args.language:
        overrides["language"] = args.language
    if args.interval_minutes is not None:
        overrides["cycle_interval_minutes"] = args.interval_minutes
    if args.keyword_pause is not None:
        overrides["keyword_pause_seconds"] = args.keyword_pause
    return replace(config, **overrides)


def _add_watch_command(subparsers: Any) -> None:
    """Register watch subcommand."""
    parser = subparsers.add_parser("watch", help="Poll keywords and emit stitched series")
    parser.add_argument("keywords", nargs="*", help="Search phrases to track")
    parser.add_argument("--watch-file", help="YAML watch list with keywords and query defaults")
    parser.add_argument("--geo", help="Geography code, e.g. US")
    parser.add_argument("--timeframe", help="Trends timeframe, e.g. 'now 4-H'")
    parser.add_argument("--language", help="Host language, e.g. en-US")
    parser.add_argument(
        "--interval-minutes",
        type=_non_negative_float,
        help="Minutes to wait between keyword cycles",
    )
    parser.add_argument(
        "--keyword-pause",
        type=_non_negative_float,
        help="Seconds to wait between two keyword queries",
    )
    parser.add_argument(
        "--max-cycles",
        type=_positive_int,
        help="Stop after this many cycles instead of running forever",
    )


def _add_replay_command(subparsers: Any) -> None:
    """Register replay subcommand."""
    parser = subparsers.add_parser(
        "replay",
        help="Stitch recorded windows from a JSONL file and emit final series",
    )
    parser.add_argument("source", help="JSONL file of recorded windows")


def _non_negative_float(raw_value: str) -> float:
    try:
        value = float(raw_value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"expected a number, got {raw_value}") from error
    if not math.isfinite(value) or value < 0:
        raise argparse.ArgumentTypeError(
            f"expected a finite non-negative number, got {raw_value}"
        )
    return value


def _positive_int(raw_value: str) -> int:
    value = int(raw_value)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {raw_value}")
    return value
