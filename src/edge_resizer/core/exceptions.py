"""Custom exceptions for the edge resizer."""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure taxonomy surfaced to the transport."""

    NOT_FOUND = "not_found"
    UNSUPPORTED_FORMAT = "unsupported_format"
    PROCESSING_FAILURE = "processing_failure"


class ImageTransformError(Exception):
    """Base exception for all edge resizer errors."""

    kind: ErrorKind = ErrorKind.PROCESSING_FAILURE


class S3Error(ImageTransformError):
    """Error raised for object store failures."""


class ObjectNotFoundError(S3Error):
    """The requested object does not exist in the store."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, key: str):
        super().__init__(f"Object not found: {key}")
        self.key = key


class UnsupportedFormatError(ImageTransformError):
    """The requested or derived format is outside the supported set."""

    kind = ErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, requested_format: str):
        super().__init__(f"Unsupported image format: {requested_format!r}")
        self.requested_format = requested_format


class ImageProcessingError(ImageTransformError):
    """Error raised when decoding, resizing or encoding fails."""


class ConfigurationError(ImageTransformError):
    """Error raised for invalid configuration options."""
