"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from refuel_radar.common.brands import build_brand_table
from refuel_radar.common.errors import ConfigError
from refuel_radar.common.fs import read_yaml
from refuel_radar.common.schema import validate_pipeline_config

PIPELINE_CONFIG_FILENAME = "pipeline.yml"


@dataclass(frozen=True)
class PipelineConfig:
    empty_brand_policy: str
    workers: int
    brand_table: Mapping[str, str]
    timestamp_key: str
    filename_suffix: str


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    return _deep_merge(base, overlay)


def load_pipeline_config(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> PipelineConfig:
    overlay_path = None
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / PIPELINE_CONFIG_FILENAME
    cfg = validate_pipeline_config(
        _load_yaml_with_overlay(config_dir / PIPELINE_CONFIG_FILENAME, overlay_path),
        allow_unknown=allow_unknown,
    )
    return PipelineConfig(
        empty_brand_policy=cfg["stations"]["empty_brand_policy"],
        workers=cfg["stations"]["workers"],
        brand_table=build_brand_table(cfg["brands"]["aliases"] or {}),
        timestamp_key=cfg["output"]["timestamp_key"],
        filename_suffix=cfg["output"]["filename_suffix"],
    )
