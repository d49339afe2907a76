"""Application constants."""

FEED_TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"
COMMANDS = (
    "check",
    "transform",
)
EMPTY_BRAND_POLICIES = ("accept", "reject")
DEFAULT_TIMESTAMP_KEY = "timestamp"
DEFAULT_OUTPUT_SUFFIX = "_normalised"
EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "feed",
    "event",
    "status",
    "duration_ms",
    "stations_in",
    "stations_out",
    "rejected",
    "error_code",
    "message",
)
