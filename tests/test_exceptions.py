"""Tests for the exception hierarchy."""

from edge_resizer.core.exceptions import (
    ConfigurationError,
    ErrorKind,
    ImageProcessingError,
    ImageTransformError,
    ObjectNotFoundError,
    S3Error,
    UnsupportedFormatError,
)


def test_exception_kinds() -> None:
    assert ObjectNotFoundError("a.jpg").kind is ErrorKind.NOT_FOUND
    assert UnsupportedFormatError("bmp").kind is ErrorKind.UNSUPPORTED_FORMAT
    assert ImageProcessingError("boom").kind is ErrorKind.PROCESSING_FAILURE
    assert S3Error("boom").kind is ErrorKind.PROCESSING_FAILURE
    assert ConfigurationError("boom").kind is ErrorKind.PROCESSING_FAILURE


def test_exception_hierarchy() -> None:
    assert issubclass(ObjectNotFoundError, S3Error)
    for exc_type in (S3Error, UnsupportedFormatError, ImageProcessingError, ConfigurationError):
        assert issubclass(exc_type, ImageTransformError)


def test_exception_attributes() -> None:
    assert ObjectNotFoundError("a.jpg").key == "a.jpg"
    assert UnsupportedFormatError("bmp").requested_format == "bmp"
    assert "bmp" in str(UnsupportedFormatError("bmp"))
