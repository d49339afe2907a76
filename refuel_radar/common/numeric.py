"""Number-or-string field coercion."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from refuel_radar.common.errors import CoercionError

NUMBER = "number"
STRING = "string"


def _parse_numeric_string(value: str) -> float:
    # float() tolerates padding and digit separators; feeds must not rely on either.
    if value != value.strip() or "_" in value or not value:
        raise CoercionError(f"Not a numeric string: {value!r}")
    try:
        return float(value)
    except ValueError as exc:
        raise CoercionError(f"Not a numeric string: {value!r}") from exc


@dataclass(frozen=True)
class NumericField:
    """A JSON value that is either a number or a numeric string."""

    kind: str
    raw: float | int | str

    @classmethod
    def from_json(cls, value: Any) -> "NumericField":
        # bool is an int subclass but never a valid number here.
        if isinstance(value, bool):
            raise CoercionError(f"Unsupported type for number: {type(value).__name__}")
        if isinstance(value, (int, float)):
            return cls(kind=NUMBER, raw=value)
        if isinstance(value, str):
            return cls(kind=STRING, raw=value)
        raise CoercionError(f"Unsupported type for number: {type(value).__name__}")

    def as_float(self) -> float:
        if self.kind == STRING:
            result = _parse_numeric_string(self.raw)
        else:
            try:
                result = float(self.raw)
            except OverflowError as exc:
                raise CoercionError("Number out of float range") from exc
        if not math.isfinite(result):
            raise CoercionError(f"Non-finite number: {self.raw!r}")
        return result


def coerce_float(value: Any) -> float:
    return NumericField.from_json(value).as_float()
