"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from refuel_radar.common.constants import DEFAULT_TIMESTAMP_KEY


@dataclass(frozen=True)
class RawFeed:
    last_updated: str
    stations: list[Any]


@dataclass(frozen=True)
class Location:
    lat: float
    lon: float

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}


@dataclass(frozen=True)
class PriceBlock:
    prices: Mapping[str, float]
    timestamp: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "prices", MappingProxyType(dict(self.prices)))

    def to_dict(self, timestamp_key: str = DEFAULT_TIMESTAMP_KEY) -> dict[str, Any]:
        # Flattened: price labels share a level with the timestamp.
        if timestamp_key in self.prices:
            raise ValueError(f"Price label clashes with timestamp key: {timestamp_key!r}")
        out: dict[str, Any] = dict(self.prices)
        out[timestamp_key] = self.timestamp
        return out


@dataclass(frozen=True)
class NormalizedStation:
    site_id: str
    brand: str
    address: str
    postcode: str
    location: Location
    price_block: PriceBlock

    @property
    def prices(self) -> Mapping[str, float]:
        return self.price_block.prices

    @property
    def timestamp(self) -> str:
        return self.price_block.timestamp

    def to_dict(self, timestamp_key: str = DEFAULT_TIMESTAMP_KEY) -> dict[str, Any]:
        return {
            "site_id": self.site_id,
            "brand": self.brand,
            "address": self.address,
            "postcode": self.postcode,
            "location": self.location.to_dict(),
            "prices": [self.price_block.to_dict(timestamp_key)],
        }


@dataclass(frozen=True)
class StationRejection:
    index: int
    site_id: str | None
    reason: str
    error_code: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "site_id": self.site_id,
            "reason": self.reason,
            "error_code": self.error_code,
        }


@dataclass(frozen=True)
class StationOutcome:
    """Per-station result: exactly one of ``station`` or ``rejection`` is set."""

    station: NormalizedStation | None = None
    rejection: StationRejection | None = None

    @property
    def ok(self) -> bool:
        return self.station is not None


@dataclass(frozen=True)
class FeedBatch:
    timestamp: str | None
    stations: list[NormalizedStation] = field(default_factory=list)
    rejections: list[StationRejection] = field(default_factory=list)
    stations_in: int = 0
