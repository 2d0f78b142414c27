"""Protocol definitions for dependency injection and testability."""

from typing import Any, Dict, Optional, Protocol, Tuple

from .models import ImageMetadata, OutputFormat


class S3ClientProtocol(Protocol):
    """Protocol for the S3 client operations the resizer needs."""

    def get_object(self, Bucket: str, Key: str) -> Dict[str, Any]:
        """Get object from S3."""
        ...


class ObjectFetcherProtocol(Protocol):
    """Protocol for fetching source bytes by object key."""

    def fetch(self, key: str) -> bytes:
        """Return the object's bytes or raise ObjectNotFoundError."""
        ...


class ImageCodecProtocol(Protocol):
    """Protocol for the pixel decode/encode capability."""

    def read_metadata(self, image_bytes: bytes) -> ImageMetadata:
        """Read intrinsic metadata from image bytes."""
        ...

    def reencode(
        self,
        image_bytes: bytes,
        output_format: OutputFormat,
        quality: int,
        box: Optional[Tuple[int, int]] = None,
    ) -> bytes:
        """Decode, normalize orientation, optionally contain-resize, encode."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log error message."""
        ...
