"""Logging setup for edge invocations, tagged with the CloudFront request id."""

import os
import sys
import logging
from typing import Optional

# Per-record fields set from a LogContext; "-" when a line has none.
REQUEST_FIELDS = ("request_id", "component", "operation")

LOG_FORMATS = {
    "structured": (
        "%(asctime)s | %(levelname)-8s | %(request_id)s | %(component)s | "
        "%(operation)s | %(name)s | %(message)s"
    ),
    "simple": "%(levelname)s [%(request_id)s] %(message)s",
}


class RequestFieldsFilter(logging.Filter):
    """Fill the request fields on records logged without a context."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name in REQUEST_FIELDS:
            if not getattr(record, name, None):
                setattr(record, name, "-")
        return True


def resolve_level(level: Optional[str] = None) -> int:
    """
    Pick the log level from the argument, then the environment.

    EDGE_RESIZER_LOG_LEVEL wins over LOG_LEVEL; unknown names mean INFO.
    """
    name = level or os.getenv("EDGE_RESIZER_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO"
    resolved = logging.getLevelName(name.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logger(
    name: str = "edge-resizer",
    level: Optional[str] = None,
    format_type: str = "structured",
) -> logging.Logger:
    """
    Configure a stdout logger whose lines carry the request fields.

    Lambda@Edge ships stdout to CloudWatch in the region that served the
    request, so every line names the request it belongs to.

    Args:
        name: Logger name (defaults to "edge-resizer")
        level: Log level override
        format_type: "structured" or "simple"

    Environment Variables:
        EDGE_RESIZER_LOG_LEVEL / LOG_LEVEL: Logging level
        LOG_FORMAT: Format override ("structured" or "simple")
    """
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level))

    # Warm invocations reuse the process
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        format_name = os.getenv("LOG_FORMAT", format_type).lower()
        handler.setFormatter(
            logging.Formatter(
                LOG_FORMATS.get(format_name, LOG_FORMATS["structured"]),
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handler.addFilter(RequestFieldsFilter())
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str = "edge-resizer") -> logging.Logger:
    """Return a configured logger nested under the edge-resizer namespace."""
    if name != "edge-resizer" and not name.startswith("edge-resizer."):
        name = f"edge-resizer.{name}"
    return setup_logger(name)
