"""Feed directory orchestration with fail-soft semantics."""

from __future__ import annotations

import time
from collections import Counter
from pathlib import Path

from refuel_radar.common.config_loader import PipelineConfig
from refuel_radar.common.errors import EnvelopeDecodeError, PipelineError, StageError
from refuel_radar.common.fs import list_feed_files, read_text
from refuel_radar.pipeline.export import write_stations_json
from refuel_radar.pipeline.feed import FeedOptions, check_feed_structure, decode_feed, normalise_feed


def output_path_for(feed_path: Path, out_dir: Path, suffix: str) -> Path:
    return out_dir / f"{feed_path.stem}{suffix}.json"


def _failed_result(feed_path: Path, exc: Exception, started: float, error_code: str | None = None) -> dict:
    return {
        "feed": feed_path.name,
        "status": "error",
        "error_code": error_code or getattr(exc, "error_code", "IO_ERROR"),
        "error_kind": getattr(exc, "kind", None),
        "message": str(exc),
        "duration_ms": int((time.monotonic() - started) * 1000),
    }


def transform_feed_file(
    feed_path: Path,
    out_dir: Path,
    config: PipelineConfig,
    options: FeedOptions,
) -> dict:
    started = time.monotonic()
    batch = normalise_feed(decode_feed(read_text(feed_path)), options)
    out_path = output_path_for(feed_path, out_dir, config.filename_suffix)
    write_stations_json(out_path, batch.stations, timestamp_key=config.timestamp_key)

    reasons = Counter(rejection.reason for rejection in batch.rejections)
    return {
        "feed": feed_path.name,
        "status": "ok",
        "timestamp": batch.timestamp,
        "stations_in": batch.stations_in,
        "stations_out": len(batch.stations),
        "rejected": len(batch.rejections),
        "rejection_reasons": dict(sorted(reasons.items())),
        "rejections": [rejection.to_dict() for rejection in batch.rejections],
        "output_path": str(out_path),
        "duration_ms": int((time.monotonic() - started) * 1000),
    }


def run_transform(
    input_path: Path,
    data_dir: Path,
    config: PipelineConfig,
    options: FeedOptions,
) -> list[dict]:
    feed_paths = list_feed_files(input_path)
    if not feed_paths:
        raise StageError(f"No feed files found at {input_path}")

    out_dir = data_dir / "out"
    results: list[dict] = []
    for feed_path in feed_paths:
        started = time.monotonic()
        try:
            results.append(transform_feed_file(feed_path, out_dir, config, options))
        except (PipelineError, OSError, UnicodeDecodeError) as exc:
            results.append(_failed_result(feed_path, exc, started))
        except Exception as exc:
            results.append(_failed_result(feed_path, exc, started, error_code="UNEXPECTED_ERROR"))

    if all(result["status"] == "error" for result in results):
        raise StageError(f"All feeds failed under {input_path}")
    return results


def run_check(input_path: Path) -> list[dict]:
    feed_paths = list_feed_files(input_path)
    if not feed_paths:
        raise StageError(f"No feed files found at {input_path}")

    results: list[dict] = []
    for feed_path in feed_paths:
        started = time.monotonic()
        try:
            text = read_text(feed_path)
        except (OSError, UnicodeDecodeError) as exc:
            results.append(_failed_result(feed_path, exc, started))
            continue
        if check_feed_structure(text):
            results.append({"feed": feed_path.name, "status": "ok"})
        else:
            exc = EnvelopeDecodeError("Feed failed structural check")
            results.append(_failed_result(feed_path, exc, started))
    return results
