"""Fake implementations for testing purposes."""

import io
import time
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from botocore.exceptions import ClientError
from PIL import Image


@dataclass
class S3Object:
    """Fake S3 object for testing."""

    key: str
    body: bytes
    content_type: str = "image/jpeg"
    size: int = 0

    def __post_init__(self):
        if self.size == 0:
            self.size = len(self.body)


@dataclass
class S3Bucket:
    """Fake S3 bucket for testing."""

    name: str
    objects: Dict[str, S3Object] = field(default_factory=dict)

    def add_object(
        self, key: str, body: bytes, content_type: str = "image/jpeg"
    ) -> None:
        """Add object to bucket."""
        self.objects[key] = S3Object(key=key, body=body, content_type=content_type)

    def get_object(self, key: str) -> Optional[S3Object]:
        """Get object from bucket."""
        return self.objects.get(key)


def _client_error(code: str, message: str, operation: str = "GetObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeS3Client:
    """Fake S3 client raising the same botocore errors as the real one."""

    def __init__(self):
        self.buckets: Dict[str, S3Bucket] = {}
        self.requested_keys: List[str] = []
        self.should_fail = False
        self.failure_code = "InternalError"

    @property
    def operation_count(self) -> int:
        return len(self.requested_keys)

    def create_bucket(self, name: str) -> S3Bucket:
        """Create a new bucket."""
        bucket = S3Bucket(name=name)
        self.buckets[name] = bucket
        return bucket

    def get_bucket(self, name: str) -> Optional[S3Bucket]:
        """Get bucket by name."""
        return self.buckets.get(name)

    def set_failure_mode(self, should_fail: bool, code: str = "InternalError") -> None:
        """Configure failure mode for testing error handling."""
        self.should_fail = should_fail
        self.failure_code = code

    def get_object(self, Bucket: str, Key: str) -> Dict[str, Any]:
        """Get object from S3."""
        self.requested_keys.append(Key)

        if self.should_fail:
            raise _client_error(self.failure_code, "Simulated S3 failure")

        bucket = self.buckets.get(Bucket)
        if not bucket:
            raise _client_error("NoSuchBucket", f"Bucket {Bucket} not found")

        obj = bucket.get_object(Key)
        if not obj:
            raise _client_error("NoSuchKey", "The specified key does not exist.")

        return {
            "Body": io.BytesIO(obj.body),
            "ContentType": obj.content_type,
            "ContentLength": obj.size,
        }


class FakeLogger:
    """Fake logger for testing with support for LogContext."""

    def __init__(self, name: str = "test_logger"):
        self.name = name
        self.logs: List[Dict[str, Any]] = []

    def _log(
        self, level: str, message: str, context: Any = None, **kwargs: Any
    ) -> None:
        log_entry = {
            "level": level,
            "message": message,
            "timestamp": time.time(),
            **kwargs,
        }

        if context is not None:
            if hasattr(context, "correlation_id"):
                log_entry["correlation_id"] = context.correlation_id
            if hasattr(context, "operation"):
                log_entry["operation"] = context.operation
            if hasattr(context, "metadata"):
                log_entry.update(context.metadata)

        self.logs.append(log_entry)

    def debug(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log debug message."""
        self._log("DEBUG", message, context, **kwargs)

    def info(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log info message."""
        self._log("INFO", message, context, **kwargs)

    def warning(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log warning message."""
        self._log("WARNING", message, context, **kwargs)

    def error(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log error message."""
        self._log("ERROR", message, context, **kwargs)

    def get_logs(self, level: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get logged messages, optionally filtered by level."""
        if level:
            return [log for log in self.logs if log["level"] == level]
        return self.logs.copy()

    def messages(self) -> List[str]:
        return [log["message"] for log in self.logs]


def create_test_image(
    width: int = 100,
    height: int = 100,
    format: str = "JPEG",
    mode: str = "RGB",
    orientation: Optional[int] = None,
) -> bytes:
    """
    Create a test image in memory.

    Args:
        width: Stored width
        height: Stored height
        format: Pillow format name ("JPEG", "PNG", "WEBP", "GIF", ...)
        mode: Pillow mode of the generated image
        orientation: Optional EXIF orientation tag to embed (JPEG/WEBP/PNG)
    """
    image = Image.new(mode, (width, height), color="red" if mode != "L" else 128)

    # Blue block in the top-left quadrant so rotations are observable
    block = Image.new(mode, (max(1, width // 2), max(1, height // 2)), color="blue" if mode != "L" else 0)
    image.paste(block, (0, 0))

    save_kwargs: Dict[str, Any] = {}
    if format.upper() in ("JPEG", "WEBP"):
        save_kwargs["quality"] = 95
    if orientation is not None:
        exif = Image.Exif()
        exif[0x0112] = orientation
        save_kwargs["exif"] = exif

    img_bytes = io.BytesIO()
    image.save(img_bytes, format=format, **save_kwargs)
    return img_bytes.getvalue()


def make_cloudfront_event(
    uri: str,
    querystring: str = "",
    accept: Optional[str] = None,
    request_id: str = "test-request-id",
) -> Dict[str, Any]:
    """Build a minimal CloudFront origin-response event."""
    headers: Dict[str, List[Dict[str, str]]] = {}
    if accept is not None:
        headers["accept"] = [{"key": "Accept", "value": accept}]

    return {
        "Records": [
            {
                "cf": {
                    "config": {"requestId": request_id},
                    "request": {
                        "uri": uri,
                        "querystring": querystring,
                        "headers": headers,
                    },
                    "response": {
                        "status": "200",
                        "statusDescription": "OK",
                        "headers": {
                            "content-type": [
                                {"key": "Content-Type", "value": "image/jpeg"}
                            ]
                        },
                    },
                }
            }
        ]
    }


def setup_test_s3_environment(bucket_name: str = "test-images") -> FakeS3Client:
    """Set up a fake bucket with sample images."""
    s3_client = FakeS3Client()
    bucket = s3_client.create_bucket(bucket_name)
    bucket.add_object("photo.jpg", create_test_image(800, 600, "JPEG"))
    bucket.add_object("photo.png", create_test_image(800, 600, "PNG"), "image/png")
    bucket.add_object("banner.webp", create_test_image(400, 100, "WEBP"), "image/webp")
    bucket.add_object("anim.gif", create_test_image(64, 64, "GIF"), "image/gif")
    bucket.add_object("dir name/photo 1.jpg", create_test_image(300, 200, "JPEG"))
    bucket.add_object("rotated.jpg", create_test_image(600, 400, "JPEG", orientation=6))
    bucket.add_object("corrupt.jpg", b"\xff\xd8\xff not really a jpeg")
    return s3_client
