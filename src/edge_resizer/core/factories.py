"""Factory classes for creating configured service instances."""

from typing import Any, Optional
import boto3

from .models import EngineConfig
from .observability import StructuredLogger
from .protocols import S3ClientProtocol, LoggerProtocol
from .services import (
    ImageCodecService,
    ImageTransformEngine,
    S3ObjectFetcher,
)


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(name: str, debug: bool = False) -> LoggerProtocol:
        """Create a configured structured logger."""
        return StructuredLogger(name, level="DEBUG" if debug else None)


class S3ClientFactory:
    """Factory for creating S3 client instances."""

    @staticmethod
    def create_s3_client(region: str, **kwargs: Any) -> S3ClientProtocol:
        """Create S3 client for the given region."""
        session = boto3.Session()
        return session.client("s3", region_name=region, **kwargs)  # type: ignore


class EngineFactory:
    """Factory for creating the complete transformation engine."""

    @staticmethod
    def create_engine(
        config: EngineConfig,
        s3_client: Optional[S3ClientProtocol] = None,
        logger: Optional[LoggerProtocol] = None,
    ) -> ImageTransformEngine:
        """Create a fully configured engine."""
        if s3_client is None:
            s3_client = S3ClientFactory.create_s3_client(config.region)

        if logger is None:
            logger = LoggerFactory.create_logger("edge-resizer", debug=config.debug)

        fetcher = S3ObjectFetcher(s3_client, config, logger)
        return ImageTransformEngine(
            config=config,
            fetcher=fetcher,
            codec=ImageCodecService(),
            logger=logger,
        )
