from __future__ import annotations

from pathlib import Path

import pytest

from refuel_radar.cli import parse_args, run_command


def _run_once(data_dir: Path, run_id: str, *extra: str) -> Path:
    args = parse_args(
        [
            "transform",
            "--input",
            "tests/fixtures/feeds/sample_feed.json",
            "--config-dir",
            "config",
            "--data-dir",
            str(data_dir),
            "--run-id",
            run_id,
            *extra,
        ]
    )
    assert run_command(args) == 0
    return data_dir / "out" / "sample_feed_normalised.json"


@pytest.mark.regression
def test_fixture_feed_snapshot_output_is_stable(tmp_path: Path):
    actual = _run_once(tmp_path / "data", "run-fixture").read_text(encoding="utf-8")
    expected = Path("tests/fixtures/expected/sample_feed_normalised.json").read_text(encoding="utf-8")
    assert actual == expected


@pytest.mark.regression
def test_outputs_are_byte_stable_across_runs_and_worker_counts(tmp_path: Path):
    first = _run_once(tmp_path / "first", "run-a").read_bytes()
    second = _run_once(tmp_path / "second", "run-b", "--workers", "4").read_bytes()
    assert first == second
