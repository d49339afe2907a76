"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class StageError(PipelineError):
    """Raised for stage failures that should halt in strict mode."""

    error_code = "STAGE_ERROR"


class CoercionError(PipelineError):
    """Raised when a value cannot be read as a float."""

    error_code = "COERCION_ERROR"


class InvalidStationError(PipelineError):
    """Raised when a single station record cannot be normalised.

    Recoverable: the station is skipped and the batch continues.
    """

    error_code = "INVALID_STATION"


class EnvelopeDecodeError(PipelineError):
    """Raised when the feed envelope cannot be used. Fatal for the batch."""

    error_code = "ENVELOPE_DECODE_ERROR"
    kind = "shape"

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class TimestampParseError(EnvelopeDecodeError):
    """Raised when the feed-level ``last_updated`` value is malformed."""

    error_code = "TIMESTAMP_PARSE_ERROR"
    kind = "timestamp"
