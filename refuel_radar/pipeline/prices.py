"""Fuel price coercion and filtering."""

from __future__ import annotations

from typing import Any, Collection

from refuel_radar.common.errors import CoercionError
from refuel_radar.common.numeric import coerce_float


def filter_prices(raw_prices: Any, *, reserved_labels: Collection[str] = ()) -> dict[str, float]:
    """Keep only prices that coerce to a strictly positive float.

    Entries that fail coercion or are zero/negative are dropped without
    signal; retailers use ``0`` and blanks for grades they do not sell.
    A ``prices`` value that is not a mapping yields no prices. Labels in
    ``reserved_labels`` collide with the flattened timestamp key and are
    dropped the same way.
    """
    if not isinstance(raw_prices, dict):
        return {}

    kept: dict[str, float] = {}
    for label, raw_value in raw_prices.items():
        if str(label) in reserved_labels:
            continue
        try:
            value = coerce_float(raw_value)
        except CoercionError:
            continue
        if value <= 0:
            continue
        kept[str(label)] = value
    return kept
