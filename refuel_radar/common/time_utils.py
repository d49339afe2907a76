"""UTC-focused timestamp helpers."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from refuel_radar.common.constants import FEED_TIMESTAMP_FORMAT
from refuel_radar.common.errors import TimestampParseError

# strptime alone accepts single-digit fields, so the shape is pinned first.
_FEED_TIMESTAMP_RE = re.compile(r"[0-9]{2}/[0-9]{2}/[0-9]{4} [0-9]{2}:[0-9]{2}:[0-9]{2}")


def convert_feed_timestamp(value: str) -> str:
    """Convert a feed ``DD/MM/YYYY HH:MM:SS`` value (UTC) to RFC 3339.

    >>> convert_feed_timestamp("27/11/2024 11:45:32")
    '2024-11-27T11:45:32+00:00'
    """
    if not isinstance(value, str) or not _FEED_TIMESTAMP_RE.fullmatch(value):
        raise TimestampParseError(f"Unexpected timestamp format: {value!r}")
    try:
        parsed = datetime.strptime(value, FEED_TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise TimestampParseError(f"Invalid timestamp: {value!r}") from exc
    return parsed.replace(tzinfo=timezone.utc).isoformat()


def utc_timestamp_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds")
