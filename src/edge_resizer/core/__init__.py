"""Core transformation engine and shared components for the edge resizer."""

from .exceptions import (
    ErrorKind,
    ImageTransformError,
    ImageProcessingError,
    ObjectNotFoundError,
    S3Error,
    UnsupportedFormatError,
    ConfigurationError,
)
from .error_handling import ErrorOutcome, classify_error, with_error_handling
from .format_negotiation import resolve_output_format
from .logging_config import get_logger, setup_logger
from .models import (
    EdgeResponse,
    EngineConfig,
    ImageMetadata,
    OutputFormat,
    Passthrough,
    PassthroughReason,
    ResizePlan,
    SourceFormat,
    TransformRequest,
    TransformResult,
)
from .request_parser import SUPPORTED_FORMATS, parse_request
from .resize_planner import plan_resize

__all__ = [
    "EngineConfig",
    "TransformRequest",
    "Passthrough",
    "PassthroughReason",
    "ImageMetadata",
    "ResizePlan",
    "OutputFormat",
    "SourceFormat",
    "TransformResult",
    "EdgeResponse",
    "SUPPORTED_FORMATS",
    "parse_request",
    "resolve_output_format",
    "plan_resize",
    "setup_logger",
    "get_logger",
    "ErrorKind",
    "ErrorOutcome",
    "classify_error",
    "with_error_handling",
    "ImageTransformError",
    "ImageProcessingError",
    "ObjectNotFoundError",
    "S3Error",
    "UnsupportedFormatError",
    "ConfigurationError",
]
