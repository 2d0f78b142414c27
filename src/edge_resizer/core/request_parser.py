"""Request parsing: URI and querystring to transformation parameters."""

import re
from typing import Dict, Optional, Union
from urllib.parse import parse_qs, unquote

from .exceptions import ObjectNotFoundError, UnsupportedFormatError
from .models import Passthrough, PassthroughReason, SourceFormat, TransformRequest

SUPPORTED_FORMATS = frozenset({"auto", "jpg", "jpeg", "webp", "avif", "png"})

DEFAULT_QUALITY = 100

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Optional[str]) -> Optional[int]:
    """
    Parse a base-10 integer the way query values are written in practice.

    Leading digits are honoured ("120px" -> 120); anything without them
    yields None.
    """
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def parse_dimension(value: Optional[str]) -> Optional[int]:
    """Parse a width/height value; non-positive or invalid means absent."""
    parsed = parse_int(value)
    if parsed is None or parsed <= 0:
        return None
    return parsed


def parse_quality(value: Optional[str]) -> int:
    """Parse quality, defaulting to 100 and clamping into [1, 100]."""
    parsed = parse_int(value)
    if parsed is None:
        return DEFAULT_QUALITY
    return max(1, min(100, parsed))


def parse_query(querystring: Optional[str]) -> Dict[str, str]:
    """Parse a querystring into a flat dict, first value winning."""
    if not querystring:
        return {}
    parsed = parse_qs(querystring.lstrip("?"), keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items() if values}


def object_key_from_uri(uri: str) -> str:
    """Percent-decode the URI and drop the one leading path separator."""
    decoded = unquote(uri)
    return decoded[1:] if decoded.startswith("/") else decoded


def extension_from_uri(uri: str) -> str:
    """Return the lower-cased text after the last '.' of the URI."""
    return uri.rsplit(".", 1)[-1].lower()


def accepts_format(accept_header: Optional[str], fmt: str) -> bool:
    """Substring test of the client capability hint."""
    if not accept_header:
        return False
    return fmt in accept_header.lower()


def parse_request(
    uri: str,
    querystring: Optional[str] = None,
    accept_header: Optional[str] = None,
) -> Union[TransformRequest, Passthrough]:
    """
    Extract and validate transformation parameters for one request.

    Args:
        uri: Raw request URI, e.g. "/images/photo.jpg"
        querystring: Raw querystring without the leading "?"
        accept_header: Client capability hint (the Accept header value)

    Returns:
        A TransformRequest, or a Passthrough signal when the source must be
        returned unchanged.

    Raises:
        UnsupportedFormatError: If the requested or derived format is not
            one of auto, jpg, jpeg, webp, avif or png.
        ObjectNotFoundError: If the URI names no object.
    """
    params = parse_query(querystring)
    object_key = object_key_from_uri(uri)

    width = parse_dimension(params.get("width"))
    height = parse_dimension(params.get("height"))
    quality = parse_quality(params.get("quality"))
    extension = extension_from_uri(uri)
    source_format = SourceFormat.from_name(extension)
    requested_format = (params.get("format") or extension).lower()
    force_format = "f" in params

    if width is None and height is None:
        return Passthrough(
            object_key=object_key, reason=PassthroughReason.NO_DIMENSIONS
        )

    if source_format is SourceFormat.GIF and not force_format:
        return Passthrough(
            object_key=object_key, reason=PassthroughReason.ANIMATED_GIF
        )

    if requested_format not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(requested_format)

    if not object_key:
        raise ObjectNotFoundError(object_key)

    return TransformRequest(
        object_key=object_key,
        width=width,
        height=height,
        quality=quality,
        requested_format=requested_format,
        source_extension=extension,
        source_format=source_format,
        accepts_avif=accepts_format(accept_header, "avif"),
        accepts_webp=accepts_format(accept_header, "webp"),
    )
