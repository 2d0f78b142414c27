"""Pillow-backed image utilities for the edge resizer."""

import io
from typing import Tuple

from PIL import Image, ImageOps

from .models import ImageMetadata, OutputFormat, SourceFormat

EXIF_ORIENTATION_TAG = 0x0112

PIL_FORMATS = {
    OutputFormat.JPEG: "JPEG",
    OutputFormat.WEBP: "WEBP",
    OutputFormat.AVIF: "AVIF",
    OutputFormat.PNG: "PNG",
}


def open_image(image_bytes: bytes) -> Image.Image:
    """
    Decode image bytes into a loaded PIL Image.

    Args:
        image_bytes: Encoded source image

    Returns:
        Loaded PIL Image
    """
    image = Image.open(io.BytesIO(image_bytes))
    image.load()
    return image


def read_orientation(img: Image.Image) -> int:
    """Return the EXIF orientation (1-8), 1 when absent or invalid."""
    orientation = img.getexif().get(EXIF_ORIENTATION_TAG, 1)
    if not isinstance(orientation, int) or not 1 <= orientation <= 8:
        return 1
    return orientation


def extract_metadata(img: Image.Image) -> ImageMetadata:
    """
    Read the intrinsic metadata of a decoded image.

    Dimensions are the stored ones, before any orientation is applied.
    """
    return ImageMetadata(
        intrinsic_width=img.width,
        intrinsic_height=img.height,
        source_format=SourceFormat.from_name(img.format),
        orientation=read_orientation(img),
    )


def normalize_orientation(img: Image.Image) -> Image.Image:
    """Rotate/flip the image upright according to its EXIF orientation."""
    return ImageOps.exif_transpose(img)


def contain_size(size: Tuple[int, int], box: Tuple[int, int]) -> Tuple[int, int]:
    """
    Compute the size of an image scaled to fit entirely within box.

    Aspect ratio is preserved and neither side of the result exceeds the
    corresponding side of box; each side is at least one pixel.
    """
    width, height = size
    box_width, box_height = box

    image_ratio = width / height
    box_ratio = box_width / box_height

    if image_ratio > box_ratio:
        new_height = max(1, round(height / width * box_width))
        return box_width, min(new_height, box_height)
    if image_ratio < box_ratio:
        new_width = max(1, round(width / height * box_height))
        return min(new_width, box_width), box_height
    return box_width, box_height


def resize_contain(img: Image.Image, box: Tuple[int, int]) -> Image.Image:
    """Resize an image with the contain fit policy (no crop, no padding)."""
    new_size = contain_size(img.size, box)
    if new_size == img.size:
        return img
    return img.resize(new_size, Image.Resampling.LANCZOS)


def _prepare_mode(img: Image.Image, output_format: OutputFormat) -> Image.Image:
    """Convert the pixel mode to one the target encoder accepts."""
    if output_format is OutputFormat.JPEG:
        if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
            background = Image.new("RGB", img.size, (255, 255, 255))
            rgba = img.convert("RGBA")
            background.paste(rgba, mask=rgba.getchannel("A"))
            return background
        if img.mode not in ("RGB", "L"):
            return img.convert("RGB")
        return img

    if img.mode not in ("RGB", "RGBA", "L", "LA") or (
        output_format is not OutputFormat.PNG and img.mode in ("L", "LA")
    ):
        has_alpha = img.mode in ("LA", "PA") or "transparency" in img.info
        return img.convert("RGBA" if has_alpha else "RGB")
    return img


def encode_image(img: Image.Image, output_format: OutputFormat, quality: int) -> bytes:
    """
    Encode a PIL Image to bytes in the given format.

    Args:
        img: PIL Image to encode
        output_format: Target format
        quality: Encoder quality in [1, 100]; ignored by PNG

    Returns:
        Encoded image bytes
    """
    prepared = _prepare_mode(img, output_format)
    output_stream = io.BytesIO()
    if output_format is OutputFormat.PNG:
        prepared.save(output_stream, format=PIL_FORMATS[output_format])
    else:
        prepared.save(
            output_stream, format=PIL_FORMATS[output_format], quality=quality
        )
    return output_stream.getvalue()
