"""CLI entrypoint for the fuel price feed normalisation pipeline."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from refuel_radar.common.config_loader import load_pipeline_config
from refuel_radar.common.constants import COMMANDS, EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS
from refuel_radar.common.errors import PipelineError
from refuel_radar.common.ids import generate_run_id
from refuel_radar.common.logging import build_logger, close_logger, log_event
from refuel_radar.pipeline.feed import FeedOptions
from refuel_radar.pipeline.reports import write_run_summary
from refuel_radar.pipeline.runner import run_check, run_transform


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return parsed


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=list(COMMANDS))
    parser.add_argument("--input", default="./feeds")
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--data-dir", default="./data")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--workers", type=_positive_int, default=None)
    parser.add_argument("--strict", action="store_true")
    return parser.parse_args(argv)


def _log_feed_result(logger, run_id: str, stage: str, result: dict) -> None:
    if result["status"] == "ok":
        log_event(
            logger,
            f"feed {result['feed']} processed",
            run_id=run_id,
            stage=stage,
            feed=result["feed"],
            event="FEED_DONE",
            status="ok",
            duration_ms=result.get("duration_ms"),
            stations_in=result.get("stations_in"),
            stations_out=result.get("stations_out"),
            rejected=result.get("rejected"),
        )
        for rejection in result.get("rejections", []):
            logger.debug(
                f"station {rejection['index']} skipped: {rejection['reason']}",
                extra={
                    "run_id": run_id,
                    "stage": stage,
                    "feed": result["feed"],
                    "event": "STATION_SKIPPED",
                    "status": "skipped",
                    "error_code": rejection["error_code"],
                },
            )
        return

    log_event(
        logger,
        f"feed {result['feed']} failed: {result.get('message', '')}",
        run_id=run_id,
        stage=stage,
        feed=result["feed"],
        event="FEED_FAIL",
        status="error",
        duration_ms=result.get("duration_ms"),
        error_code=result.get("error_code"),
    )


def execute_command(args: argparse.Namespace, run_id: str, data_dir: Path) -> list[dict]:
    input_path = Path(args.input)
    if args.command == "check":
        return run_check(input_path)
    if args.command == "transform":
        overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
        config = load_pipeline_config(Path(args.config_dir), overlay_config_dir=overlay_config_dir)
        options = FeedOptions.from_config(config, workers=args.workers)
        results = run_transform(input_path, data_dir, config, options)
        write_run_summary(data_dir, run_id=run_id, command=args.command, results=results)
        return results
    raise ValueError(f"Unknown command: {args.command}")


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    data_dir = Path(args.data_dir)
    stage = args.command

    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    try:
        log_event(logger, "stage start", run_id=run_id, stage=stage, event="STAGE_START", status="ok")
        try:
            results = execute_command(args, run_id, data_dir)
        except PipelineError as exc:
            log_event(
                logger,
                f"stage failed: {exc}",
                run_id=run_id,
                stage=stage,
                event="STAGE_FAIL",
                status="error",
                error_code=exc.error_code,
            )
            return EXIT_HARD_FAIL

        for result in results:
            _log_feed_result(logger, run_id, stage, result)
        log_event(logger, "stage end", run_id=run_id, stage=stage, event="STAGE_END", status="ok")

        if any(result["status"] != "ok" for result in results):
            return EXIT_HARD_FAIL if args.strict else EXIT_PARTIAL
        return EXIT_SUCCESS
    finally:
        close_logger(logger)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or sys.argv[1:])
    try:
        return run_command(args)
    except PipelineError:
        return EXIT_HARD_FAIL
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
