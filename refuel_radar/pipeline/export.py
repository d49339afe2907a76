"""Normalised station JSON export."""

from __future__ import annotations

from pathlib import Path

from refuel_radar.common.constants import DEFAULT_TIMESTAMP_KEY
from refuel_radar.common.fs import write_json
from refuel_radar.common.models import NormalizedStation


def serialise_stations(
    stations: list[NormalizedStation],
    *,
    timestamp_key: str = DEFAULT_TIMESTAMP_KEY,
) -> dict:
    return {"stations": [station.to_dict(timestamp_key) for station in stations]}


def write_stations_json(
    out_path: Path,
    stations: list[NormalizedStation],
    *,
    timestamp_key: str = DEFAULT_TIMESTAMP_KEY,
) -> Path:
    write_json(out_path, serialise_stations(stations, timestamp_key=timestamp_key))
    return out_path
