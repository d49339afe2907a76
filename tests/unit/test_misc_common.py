import json
import logging
from pathlib import Path

from refuel_radar.common.constants import JSON_LOG_FIELDS
from refuel_radar.common.fs import list_feed_files, write_json
from refuel_radar.common.ids import generate_run_id
from refuel_radar.common.logging import JsonLineFormatter, build_logger, close_logger, log_event


def test_generate_run_id_prefix():
    assert generate_run_id().startswith("run-")


def test_list_feed_files_sorts_json_files(tmp_path: Path):
    write_json(tmp_path / "b.json", {})
    write_json(tmp_path / "a.json", {})
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")

    assert [p.name for p in list_feed_files(tmp_path)] == ["a.json", "b.json"]
    assert list_feed_files(tmp_path / "a.json") == [tmp_path / "a.json"]


def test_json_line_formatter_emits_stable_fields():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "feed done", None, None)
    record.feed = "tesco.json"
    record.stations_out = 3
    payload = json.loads(JsonLineFormatter().format(record))

    assert set(payload) == set(JSON_LOG_FIELDS)
    assert payload["feed"] == "tesco.json"
    assert payload["stations_out"] == 3
    assert payload["message"] == "feed done"


def test_build_logger_writes_run_log(tmp_path: Path):
    logger = build_logger("run-log", data_dir=tmp_path)
    log_event(logger, "stage start", run_id="run-log", stage="transform", event="STAGE_START")
    close_logger(logger)

    lines = (tmp_path / "run_meta" / "run-log.log.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[0])["event"] == "STAGE_START"
