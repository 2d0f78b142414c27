# src/edge_resizer/core/error_handling.py

import functools
import logging
from dataclasses import dataclass

from botocore.exceptions import BotoCoreError, ClientError as BotocoreClientError
from PIL import Image, UnidentifiedImageError as PILUnidentifiedImageError

from .exceptions import (
    ErrorKind,
    ImageProcessingError,
    ImageTransformError,
    ObjectNotFoundError,
    S3Error,
)

NOT_FOUND_S3_ERROR_CODES = ("NoSuchKey", "404", "NotFound")

IMAGE_ERRORS = (
    PILUnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    SyntaxError,
    ValueError,
)


@dataclass(frozen=True)
class ErrorOutcome:
    """Status semantics of a classified failure."""

    kind: ErrorKind
    status: int
    status_description: str
    message: str


ERROR_OUTCOMES = {
    ErrorKind.NOT_FOUND: ErrorOutcome(
        ErrorKind.NOT_FOUND, 404, "Not Found", "Image not found."
    ),
    ErrorKind.UNSUPPORTED_FORMAT: ErrorOutcome(
        ErrorKind.UNSUPPORTED_FORMAT, 403, "Forbidden", "Unsupported image type"
    ),
    ErrorKind.PROCESSING_FAILURE: ErrorOutcome(
        ErrorKind.PROCESSING_FAILURE,
        500,
        "Internal Server Error",
        "Image processing failed.",
    ),
}


def classify_error(error: BaseException) -> ErrorOutcome:
    """
    Map a failure to one of the outcomes of the error taxonomy.

    Errors that are not part of the hierarchy are treated as processing
    failures so internal detail never reaches the caller.
    """
    if isinstance(error, ImageTransformError):
        return ERROR_OUTCOMES[error.kind]
    if isinstance(error, BotocoreClientError) and _client_error_code(error) in NOT_FOUND_S3_ERROR_CODES:
        return ERROR_OUTCOMES[ErrorKind.NOT_FOUND]
    return ERROR_OUTCOMES[ErrorKind.PROCESSING_FAILURE]


def _client_error_code(error: BotocoreClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


def with_error_handling(func):
    """
    A decorator to wrap collaborator calls with standardized error handling.

    Botocore (service and transport) and Pillow failures are logged and re-raised as members of the
    ImageTransformError hierarchy; errors already in it pass through.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__ + '.' + func.__name__)
        try:
            return func(*args, **kwargs)
        except ImageTransformError:
            raise
        except BotocoreClientError as e:
            code = _client_error_code(e)
            if code in NOT_FOUND_S3_ERROR_CODES:
                key = kwargs.get("key") or (args[-1] if args else "")
                logger.warning(f"Object missing in '{func.__name__}': {e}")
                raise ObjectNotFoundError(str(key)) from e
            logger.error(f"S3 error in '{func.__name__}': {e}", exc_info=True)
            raise S3Error(f"S3 operation failed in {func.__name__}: {e}") from e
        except BotoCoreError as e:
            logger.error(f"S3 transport error in '{func.__name__}': {e}", exc_info=True)
            raise S3Error(f"S3 request failed in {func.__name__}: {e}") from e
        except IMAGE_ERRORS as e:
            logger.error(f"Image error in '{func.__name__}': {e}", exc_info=True)
            raise ImageProcessingError(
                f"Image processing error in {func.__name__}: {e}"
            ) from e
    return wrapper
