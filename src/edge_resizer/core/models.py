"""Shared data models for the edge resizer."""

import json
import os
from dataclasses import dataclass
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from .exceptions import ConfigurationError

CONFIG_FILE_NAME = "edge_config.json"

ENV_OVERRIDES = {
    "EDGE_RESIZER_BUCKET": "bucket",
    "EDGE_RESIZER_REGION": "region",
    "EDGE_RESIZER_DEBUG": "debug",
}


class OutputFormat(str, Enum):
    """Concrete formats a transformed image can be encoded to."""

    JPEG = "jpeg"
    WEBP = "webp"
    AVIF = "avif"
    PNG = "png"

    @property
    def content_type(self) -> str:
        return f"image/{self.value}"


class SourceFormat(str, Enum):
    """Source format tag, decided once from the URI extension or decoder."""

    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    AVIF = "avif"
    GIF = "gif"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "SourceFormat":
        """Map an extension or a Pillow format name to a tag."""
        normalized = (name or "").lower()
        if normalized == "jpg":
            normalized = "jpeg"
        try:
            return cls(normalized)
        except ValueError:
            return cls.OTHER


class PassthroughReason(str, Enum):
    """Why a request is answered with the unmodified source."""

    NO_DIMENSIONS = "no_dimensions"
    ANIMATED_GIF = "animated_gif"


class EngineConfig(BaseModel):
    """Configuration injected into the engine at construction."""

    bucket: str = Field(min_length=1)
    region: str = "ap-northeast-2"
    debug: bool = False

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "EngineConfig":
        """
        Build the configuration bundled with the deployment package.

        Lambda@Edge functions have no environment variables, so the values
        come from `edge_config.json` shipped inside the package (or `path`).
        Environment variables, when present, override the file.

        Environment Variables:
            EDGE_RESIZER_BUCKET: Source bucket
            EDGE_RESIZER_REGION: Bucket region
            EDGE_RESIZER_DEBUG: "1"/"true" enables debug logging

        Raises:
            ConfigurationError: If the file is unreadable or invalid, or no
                bucket is configured.
        """
        try:
            if path is None:
                raw = resources.files("edge_resizer").joinpath(CONFIG_FILE_NAME).read_text()
            else:
                raw = Path(path).read_text()
            values = json.loads(raw)
        except (OSError, ValueError) as exc:
            raise ConfigurationError(f"Cannot read {path or CONFIG_FILE_NAME}: {exc}") from exc

        for env_name, field_name in ENV_OVERRIDES.items():
            if os.getenv(env_name):
                values[field_name] = os.environ[env_name]
        if "debug" in values and isinstance(values["debug"], str):
            values["debug"] = values["debug"].lower() in ("1", "true", "yes")

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid edge resizer configuration: {exc}") from exc


class TransformRequest(BaseModel):
    """Validated transformation parameters for a single request."""

    object_key: str = Field(min_length=1)
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    quality: int = Field(default=100, ge=1, le=100)
    requested_format: str
    source_extension: str
    source_format: SourceFormat = SourceFormat.OTHER
    accepts_avif: bool = False
    accepts_webp: bool = False

    @model_validator(mode="after")
    def _check_shape(self) -> "TransformRequest":
        if self.width is None and self.height is None:
            raise ValueError("at least one of width or height is required")
        return self


class Passthrough(BaseModel):
    """Signal that the source must be returned unchanged."""

    object_key: str
    reason: PassthroughReason


class ImageMetadata(BaseModel):
    """Intrinsic properties of a decoded source image."""

    intrinsic_width: int = Field(gt=0)
    intrinsic_height: int = Field(gt=0)
    source_format: SourceFormat
    orientation: int = 1


class ResizePlan(BaseModel):
    """Target geometry derived from a request and the source metadata."""

    should_resize: bool
    target_width: int = Field(gt=0)
    target_height: int = Field(gt=0)


@dataclass(frozen=True)
class TransformResult:
    """Output bytes of the transformation pipeline."""

    body: bytes
    output_format: OutputFormat
    resized: bool = False
    reencoded: bool = False

    @property
    def content_type(self) -> str:
        return self.output_format.content_type


@dataclass(frozen=True)
class EdgeResponse:
    """Transport-neutral outcome of one request."""

    status: int
    status_description: str
    body: str = ""
    content_type: Optional[str] = None
    body_encoding: Optional[str] = None
    passthrough: bool = False

    @classmethod
    def unchanged(cls) -> "EdgeResponse":
        """Delegate to the caller's own unmodified response."""
        return cls(status=200, status_description="OK", passthrough=True)
