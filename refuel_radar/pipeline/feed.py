"""Feed envelope decoding and batch normalisation."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Mapping

from refuel_radar.common.brands import BRAND_TABLE
from refuel_radar.common.config_loader import PipelineConfig
from refuel_radar.common.constants import DEFAULT_TIMESTAMP_KEY
from refuel_radar.common.errors import EnvelopeDecodeError
from refuel_radar.common.models import FeedBatch, NormalizedStation, RawFeed, StationOutcome
from refuel_radar.common.time_utils import convert_feed_timestamp
from refuel_radar.pipeline.stations import evaluate_station


@dataclass(frozen=True)
class FeedOptions:
    brand_table: Mapping[str, str] = field(default_factory=lambda: BRAND_TABLE)
    empty_brand_policy: str = "accept"
    workers: int = 1
    timestamp_key: str = DEFAULT_TIMESTAMP_KEY

    @classmethod
    def from_config(cls, config: PipelineConfig, *, workers: int | None = None) -> "FeedOptions":
        return cls(
            brand_table=config.brand_table,
            empty_brand_policy=config.empty_brand_policy,
            workers=workers if workers is not None else config.workers,
            timestamp_key=config.timestamp_key,
        )


def _load_json(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except (ValueError, UnicodeDecodeError, RecursionError) as exc:
        raise EnvelopeDecodeError(f"Feed is not valid JSON: {exc}", kind="syntax") from exc


def _validate_envelope(payload: Any) -> RawFeed:
    if not isinstance(payload, dict):
        raise EnvelopeDecodeError("Feed root must be an object")
    if "last_updated" not in payload:
        raise EnvelopeDecodeError("Feed is missing last_updated")
    if "stations" not in payload:
        raise EnvelopeDecodeError("Feed is missing stations")
    if not isinstance(payload["last_updated"], str):
        raise EnvelopeDecodeError("last_updated must be a string")
    if not isinstance(payload["stations"], list):
        raise EnvelopeDecodeError("stations must be a list")
    return RawFeed(last_updated=payload["last_updated"], stations=payload["stations"])


def check_feed_structure(text: str | bytes) -> bool:
    """Structural pre-check: a well-formed envelope with at least one station.

    Station contents and the timestamp value are not inspected.
    """
    try:
        raw_feed = decode_feed(text)
    except EnvelopeDecodeError:
        return False
    return bool(raw_feed.stations)


def decode_feed(text: str | bytes) -> RawFeed:
    return _validate_envelope(_load_json(text))


def normalise_feed(raw_feed: RawFeed, options: FeedOptions | None = None) -> FeedBatch:
    options = options or FeedOptions()
    if not raw_feed.stations:
        return FeedBatch(timestamp=None)

    # Fatal for the whole batch; raised before any station is touched.
    timestamp = convert_feed_timestamp(raw_feed.last_updated)

    def _evaluate(item: tuple[int, Any]) -> StationOutcome:
        index, raw = item
        return evaluate_station(
            index,
            raw,
            timestamp,
            brand_table=options.brand_table,
            empty_brand_policy=options.empty_brand_policy,
            timestamp_key=options.timestamp_key,
        )

    items = list(enumerate(raw_feed.stations))
    if options.workers > 1 and len(items) > 1:
        with ThreadPoolExecutor(max_workers=options.workers) as pool:
            # map() yields in submission order.
            outcomes = list(pool.map(_evaluate, items))
    else:
        outcomes = [_evaluate(item) for item in items]

    return FeedBatch(
        timestamp=timestamp,
        stations=[o.station for o in outcomes if o.station is not None],
        rejections=[o.rejection for o in outcomes if o.rejection is not None],
        stations_in=len(items),
    )


def process_feed(text: str | bytes, options: FeedOptions | None = None) -> list[NormalizedStation]:
    return normalise_feed(decode_feed(text), options).stations
