"""Validate and normalise a single raw station record."""

from __future__ import annotations

from typing import Any, Mapping

from refuel_radar.common.brands import BRAND_TABLE, canonicalise_brand
from refuel_radar.common.constants import DEFAULT_TIMESTAMP_KEY
from refuel_radar.common.errors import CoercionError, InvalidStationError
from refuel_radar.common.models import (
    Location,
    NormalizedStation,
    PriceBlock,
    StationOutcome,
    StationRejection,
)
from refuel_radar.common.numeric import coerce_float
from refuel_radar.pipeline.prices import filter_prices


def _require_str(raw: dict, key: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        raise InvalidStationError(f"{key} is missing or not a string")
    return value


def _read_brand(raw: dict, empty_brand_policy: str) -> str:
    brand = raw.get("brand")
    if brand is None:
        raise InvalidStationError("brand is null")
    if not isinstance(brand, str):
        raise InvalidStationError("brand is not a string")
    if empty_brand_policy == "reject" and not brand.strip():
        raise InvalidStationError("brand is empty")
    return brand


def _read_location(raw: dict) -> Location:
    location = raw.get("location")
    if not isinstance(location, dict):
        raise InvalidStationError("location is missing or not an object")
    try:
        lat = coerce_float(location.get("latitude"))
    except CoercionError as exc:
        raise InvalidStationError(f"invalid latitude: {exc}") from exc
    try:
        lon = coerce_float(location.get("longitude"))
    except CoercionError as exc:
        raise InvalidStationError(f"invalid longitude: {exc}") from exc
    return Location(lat=lat, lon=lon)


def normalise_station(
    raw: Any,
    timestamp: str,
    *,
    brand_table: Mapping[str, str] = BRAND_TABLE,
    empty_brand_policy: str = "accept",
    timestamp_key: str = DEFAULT_TIMESTAMP_KEY,
) -> NormalizedStation:
    if not isinstance(raw, dict):
        raise InvalidStationError("station record is not an object")

    brand = canonicalise_brand(_read_brand(raw, empty_brand_policy), brand_table)
    site_id = _require_str(raw, "site_id")
    address = _require_str(raw, "address")
    postcode = _require_str(raw, "postcode")
    location = _read_location(raw)
    prices = filter_prices(raw.get("prices"), reserved_labels=(timestamp_key,))

    return NormalizedStation(
        site_id=site_id,
        brand=brand,
        address=address,
        postcode=postcode,
        location=location,
        price_block=PriceBlock(prices=prices, timestamp=timestamp),
    )


def evaluate_station(
    index: int,
    raw: Any,
    timestamp: str,
    *,
    brand_table: Mapping[str, str] = BRAND_TABLE,
    empty_brand_policy: str = "accept",
    timestamp_key: str = DEFAULT_TIMESTAMP_KEY,
) -> StationOutcome:
    try:
        station = normalise_station(
            raw,
            timestamp,
            brand_table=brand_table,
            empty_brand_policy=empty_brand_policy,
            timestamp_key=timestamp_key,
        )
    except InvalidStationError as exc:
        site_id = raw.get("site_id") if isinstance(raw, dict) else None
        return StationOutcome(
            rejection=StationRejection(
                index=index,
                site_id=site_id if isinstance(site_id, str) else None,
                reason=str(exc),
                error_code=exc.error_code,
            )
        )
    return StationOutcome(station=station)
