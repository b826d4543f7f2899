"""Unit tests for CLI command handling."""

from __future__ import annotations

import json

import pytest

import cli.main as cli_main
from cli.main import main


class _FakeTrendsClient:
    def __init__(self, config: object) -> None:
        self.config = config

    def fetch_window(self, keyword: str) -> dict[int, int]:
        return {100: len(keyword), 200: 0}


def _records(output: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in output.splitlines() if line.strip()]


def test_cli_replay_prints_stitched_series(fixtures_dir, capsys) -> None:
    """Replay should print the final series of every keyword."""
    exit_code = main(["replay", str(fixtures_dir / "windows" / "two_keywords.jsonl")])
    records = _records(capsys.readouterr().out)

    assert exit_code == 0 and [(row["keyword"], row["timestamp"]) for row in records] == [
        ("bitcoin", 200),
        ("bitcoin", 300),
        ("bitcoin", 400),
        ("ethereum", 200),
        ("ethereum", 300),
    ]


def test_cli_replay_writes_state_file(fixtures_dir, tmp_path) -> None:
    """Replay persists the stitched series when a state file is given."""
    state_path = tmp_path / "series.json"

    main(
        [
            "--state-file",
            str(state_path),
            "replay",
            str(fixtures_dir / "windows" / "two_keywords.jsonl"),
        ]
    )

    assert json.loads(state_path.read_text(encoding="utf-8"))["series"]["ethereum"] == {
        "200": 7,
        "300": 0,
    }


def test_cli_watch_runs_bounded_cycles(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    """Watch should query each keyword and stop after max cycles."""
    monkeypatch.setattr(cli_main, "TrendsClient", _FakeTrendsClient)

    exit_code = main(
        ["watch", "ab", "abc", "--max-cycles", "1", "--keyword-pause", "0", "--interval-minutes", "0"]
    )
    records = _records(capsys.readouterr().out)

    assert exit_code == 0 and [row["value"] for row in records] == [2, 0, 3, 0]


def test_cli_watch_reads_keywords_from_watch_file(
    monkeypatch: pytest.MonkeyPatch, fixtures_dir, capsys
) -> None:
    """Watch-file keywords are tracked alongside positional keywords."""
    monkeypatch.setattr(cli_main, "TrendsClient", _FakeTrendsClient)

    main(
        [
            "watch",
            "--watch-file",
            str(fixtures_dir / "watch" / "valid_watch.yaml"),
            "--max-cycles",
            "1",
            "--keyword-pause",
            "0",
        ]
    )
    keywords = {row["keyword"] for row in _records(capsys.readouterr().out)}

    assert keywords == {"bitcoin", "machine learning"}


def test_cli_watch_without_keywords_exits() -> None:
    """Watch with no keywords is a usage error."""
    with pytest.raises(SystemExit):
        main(["watch", "--max-cycles", "1"])


@pytest.mark.parametrize("flag", ["--interval-minutes", "--keyword-pause"])
@pytest.mark.parametrize("raw_value", ["nan", "inf"])
def test_cli_watch_rejects_non_finite_durations(flag: str, raw_value: str) -> None:
    """Non-finite sleep durations are usage errors, not runtime crashes."""
    with pytest.raises(SystemExit):
        main(["watch", "bitcoin", flag, raw_value])


def test_cli_rejects_unknown_log_level() -> None:
    """A misspelled log level is a usage error."""
    with pytest.raises(SystemExit):
        main(["--log-level", "verbose", "replay", "unused.jsonl"])


def test_cli_accepts_lowercase_log_level(fixtures_dir, capsys) -> None:
    """Log levels are case-insensitive."""
    exit_code = main(
        ["--log-level", "debug", "replay", str(fixtures_dir / "windows" / "two_keywords.jsonl")]
    )
    capsys.readouterr()

    assert exit_code == 0
