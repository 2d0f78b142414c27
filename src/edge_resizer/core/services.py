"""Service implementations for the edge image transformation engine."""

import base64
import time
from typing import Optional, Tuple

from pydantic import ValidationError

from .error_handling import classify_error, with_error_handling
from .exceptions import ImageTransformError
from .format_negotiation import resolve_output_format
from .image_utils import (
    encode_image,
    extract_metadata,
    normalize_orientation,
    open_image,
    resize_contain,
)
from .models import (
    EdgeResponse,
    EngineConfig,
    ImageMetadata,
    OutputFormat,
    Passthrough,
    ResizePlan,
    TransformResult,
)
from .observability import LogContext
from .protocols import (
    ImageCodecProtocol,
    LoggerProtocol,
    ObjectFetcherProtocol,
    S3ClientProtocol,
)
from .request_parser import parse_request
from .resize_planner import plan_resize


class ImageCodecService:
    """Pure image codec service with no I/O dependencies."""

    @with_error_handling
    def read_metadata(self, image_bytes: bytes) -> ImageMetadata:
        """Read intrinsic metadata from image bytes."""
        return extract_metadata(open_image(image_bytes))

    @with_error_handling
    def reencode(
        self,
        image_bytes: bytes,
        output_format: OutputFormat,
        quality: int,
        box: Optional[Tuple[int, int]] = None,
    ) -> bytes:
        """Decode, rotate upright, optionally contain-resize into box, encode."""
        image = normalize_orientation(open_image(image_bytes))
        if box is not None:
            image = resize_contain(image, box)
        return encode_image(image, output_format, quality)


class S3ObjectFetcher:
    """Fetches source objects from the configured bucket."""

    def __init__(
        self, s3_client: S3ClientProtocol, config: EngineConfig, logger: LoggerProtocol
    ):
        self._s3_client = s3_client
        self._bucket = config.bucket
        self._logger = logger

    def fetch(self, key: str) -> bytes:
        """Return the object's bytes or raise ObjectNotFoundError."""
        self._logger.debug(f"Downloading s3://{self._bucket}/{key}")
        return self._get_object_body(self._bucket, key)

    @with_error_handling
    def _get_object_body(self, bucket: str, key: str) -> bytes:
        response = self._s3_client.get_object(Bucket=bucket, Key=key)
        return response["Body"].read()


class TransformationPipeline:
    """Chooses between resize+reencode, reencode-only and passthrough."""

    def __init__(self, codec: ImageCodecProtocol, logger: LoggerProtocol):
        self._codec = codec
        self._logger = logger

    def run(
        self,
        source_bytes: bytes,
        plan: ResizePlan,
        output_format: OutputFormat,
        quality: int,
        metadata: ImageMetadata,
        log_context: Optional[LogContext] = None,
    ) -> TransformResult:
        """
        Produce the final bytes for a request.

        When neither the dimensions nor the format change, the source
        bytes object itself is returned without decoding.
        """
        if plan.should_resize:
            body = self._codec.reencode(
                source_bytes,
                output_format,
                quality,
                box=(plan.target_width, plan.target_height),
            )
            self._logger.info(
                f"Image resized to {plan.target_width}x{plan.target_height}",
                log_context,
            )
            return TransformResult(
                body=body, output_format=output_format, resized=True, reencoded=True
            )

        if output_format.value != metadata.source_format.value:
            body = self._codec.reencode(source_bytes, output_format, quality)
            self._logger.info(
                f"Image format converted to {output_format.value} without resizing",
                log_context,
            )
            return TransformResult(
                body=body, output_format=output_format, reencoded=True
            )

        self._logger.info("Using original image (no resizing needed)", log_context)
        return TransformResult(body=source_bytes, output_format=output_format)


class ImageTransformEngine:
    """Runs one request end-to-end: parse, fetch, plan, transform, respond."""

    def __init__(
        self,
        config: EngineConfig,
        fetcher: ObjectFetcherProtocol,
        codec: ImageCodecProtocol,
        logger: LoggerProtocol,
    ):
        self._config = config
        self._fetcher = fetcher
        self._codec = codec
        self._logger = logger
        self._pipeline = TransformationPipeline(codec, logger)

    def handle(
        self,
        uri: str,
        querystring: Optional[str] = None,
        accept_header: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> EdgeResponse:
        """
        Handle one image request.

        Args:
            uri: Request URI
            querystring: Raw querystring
            accept_header: Client capability hint
            correlation_id: Request id used to tag log lines

        Returns:
            EdgeResponse; `passthrough` is set when the caller should
            deliver the source unchanged.
        """
        log_context = LogContext(component="image_transform_engine").with_metadata(
            uri=uri, query=querystring or "", bucket=self._config.bucket
        )
        if correlation_id:
            log_context.correlation_id = correlation_id
        start_time = time.time()

        try:
            parsed = parse_request(uri, querystring, accept_header)
        except (ImageTransformError, ValidationError) as e:
            self._logger.warning(
                "Rejected request", log_context.with_operation("parse_request"),
                error=str(e),
            )
            return self._error_response(e)

        if isinstance(parsed, Passthrough):
            self._logger.debug(
                "Returning source unchanged",
                log_context.with_operation("parse_request"),
                reason=parsed.reason.value,
            )
            return EdgeResponse.unchanged()

        output_format = resolve_output_format(
            parsed.requested_format, parsed.accepts_avif, parsed.accepts_webp
        )

        try:
            source_bytes = self._fetcher.fetch(parsed.object_key)
        except ImageTransformError as e:
            self._logger.warning(
                "Fetch failed", log_context.with_operation("fetch"), error=str(e)
            )
            return self._error_response(e)

        try:
            metadata = self._codec.read_metadata(source_bytes)
            plan = plan_resize(parsed.width, parsed.height, metadata)
            self._logger.debug(
                "Planned transformation",
                log_context.with_operation("plan_resize"),
                should_resize=plan.should_resize,
                target=f"{plan.target_width}x{plan.target_height}",
                output_format=output_format.value,
            )
            result = self._pipeline.run(
                source_bytes,
                plan,
                output_format,
                parsed.quality,
                metadata,
                log_context.with_operation("transform"),
            )
        except Exception as e:
            self._logger.error(
                "Image processing failed",
                log_context.with_operation("transform"),
                exc_info=True,
                error=str(e),
            )
            return self._error_response(e)

        self._logger.info(
            "Image processing successful",
            log_context,
            content_type=result.content_type,
            processing_time_ms=round((time.time() - start_time) * 1000, 1),
        )
        return EdgeResponse(
            status=200,
            status_description="OK",
            body=base64.b64encode(result.body).decode("ascii"),
            content_type=result.content_type,
            body_encoding="base64",
        )

    @staticmethod
    def _error_response(error: BaseException) -> EdgeResponse:
        outcome = classify_error(error)
        return EdgeResponse(
            status=outcome.status,
            status_description=outcome.status_description,
            body=outcome.message,
            content_type="text/plain",
        )
