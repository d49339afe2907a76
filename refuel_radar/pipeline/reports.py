"""Run report aggregation."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from refuel_radar.common.fs import write_json


def summarise_results(results: list[dict]) -> dict:
    totals = {
        "feeds": len(results),
        "feeds_failed": 0,
        "stations_in": 0,
        "stations_out": 0,
        "rejected": 0,
    }
    reasons: Counter = Counter()

    for result in results:
        if result.get("status") != "ok":
            totals["feeds_failed"] += 1
            continue
        totals["stations_in"] += int(result.get("stations_in", 0))
        totals["stations_out"] += int(result.get("stations_out", 0))
        totals["rejected"] += int(result.get("rejected", 0))
        reasons.update(result.get("rejection_reasons", {}))

    status = "success"
    if totals["feeds"] and totals["feeds_failed"] == totals["feeds"]:
        status = "error"
    elif totals["feeds_failed"] > 0:
        status = "partial"

    return {
        "status": status,
        "totals": totals,
        "rejection_reasons": dict(sorted(reasons.items())),
    }


def write_run_summary(data_dir: Path, run_id: str, command: str, results: list[dict]) -> Path:
    summary = summarise_results(results)
    summary_path = data_dir / "out" / "reports" / "run_summary.json"
    payload = {
        "run_id": run_id,
        "command": command,
        "status": summary["status"],
        "totals": summary["totals"],
        "rejection_reasons": summary["rejection_reasons"],
        "feeds": results,
    }
    write_json(summary_path, payload)
    return summary_path
