"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from refuel_radar.common.constants import EMPTY_BRAND_POLICIES
from refuel_radar.common.errors import ConfigError


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def validate_pipeline_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    top_required = {"stations", "brands", "output"}
    _assert_required_keys(cfg, top_required, "pipeline config")
    _assert_no_unknown_keys(cfg, top_required, "pipeline config", allow_unknown)

    stations_keys = {"empty_brand_policy", "workers"}
    _assert_required_keys(cfg["stations"], stations_keys, "stations")
    _assert_no_unknown_keys(cfg["stations"], stations_keys, "stations", allow_unknown)
    if cfg["stations"]["empty_brand_policy"] not in EMPTY_BRAND_POLICIES:
        allowed = ", ".join(EMPTY_BRAND_POLICIES)
        raise ConfigError(f"stations.empty_brand_policy must be one of: {allowed}")
    workers = cfg["stations"]["workers"]
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise ConfigError("stations.workers must be a positive integer")

    _assert_required_keys(cfg["brands"], {"aliases"}, "brands")
    _assert_no_unknown_keys(cfg["brands"], {"aliases"}, "brands", allow_unknown)
    aliases = cfg["brands"]["aliases"] or {}
    if not isinstance(aliases, dict):
        raise ConfigError("brands.aliases must be a mapping")
    for raw, canonical in aliases.items():
        if not isinstance(raw, str) or not isinstance(canonical, str) or not canonical.strip():
            raise ConfigError(f"Invalid brand alias: {raw!r} -> {canonical!r}")

    output_keys = {"timestamp_key", "filename_suffix"}
    _assert_required_keys(cfg["output"], output_keys, "output")
    _assert_no_unknown_keys(cfg["output"], output_keys, "output", allow_unknown)
    timestamp_key = cfg["output"]["timestamp_key"]
    if not isinstance(timestamp_key, str) or not timestamp_key:
        raise ConfigError("output.timestamp_key must be a non-empty string")
    if not isinstance(cfg["output"]["filename_suffix"], str):
        raise ConfigError("output.filename_suffix must be a string")

    return cfg
