"""Resolution of the requested format into a concrete output format."""

from .models import OutputFormat

DEFAULT_OUTPUT_FORMAT = OutputFormat.JPEG

FORMAT_ALIASES = {"jpg": OutputFormat.JPEG}


def resolve_output_format(
    requested_format: str,
    accepts_avif: bool = False,
    accepts_webp: bool = False,
) -> OutputFormat:
    """
    Resolve a validated format request and capability hint to one format.

    "auto" prefers avif, then webp, then falls back to jpeg; "jpg" is an
    alias for jpeg. Any other supported value is used as-is.
    """
    if requested_format in FORMAT_ALIASES:
        return FORMAT_ALIASES[requested_format]

    if requested_format == "auto":
        if accepts_avif:
            return OutputFormat.AVIF
        if accepts_webp:
            return OutputFormat.WEBP
        return DEFAULT_OUTPUT_FORMAT

    return OutputFormat(requested_format)
