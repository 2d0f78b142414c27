"""Resize planning with clamp-to-original on each axis."""

from typing import Optional, Tuple

from .logging_config import get_logger
from .models import ImageMetadata, ResizePlan


def _plan_axis(
    axis: str, requested: Optional[int], intrinsic: int
) -> Tuple[int, bool]:
    """Return the target for one axis and whether it triggers a resize."""
    if requested is None:
        return intrinsic, False

    if requested > intrinsic:
        get_logger("planner").info(
            f"Requested {axis} ({requested}) is larger than original "
            f"({intrinsic}). Using original {axis}."
        )
        return intrinsic, False

    return requested, True


def plan_resize(
    width: Optional[int], height: Optional[int], metadata: ImageMetadata
) -> ResizePlan:
    """
    Compute the resize plan for a request against the source dimensions.

    Each axis is clamped independently; an axis clamped to the original
    never triggers a resize, so images are never upscaled.

    Args:
        width: Requested width, if any
        height: Requested height, if any
        metadata: Intrinsic metadata of the source image

    Returns:
        ResizePlan with the box the image must be fitted into
    """
    target_width, resize_width = _plan_axis("width", width, metadata.intrinsic_width)
    target_height, resize_height = _plan_axis(
        "height", height, metadata.intrinsic_height
    )

    return ResizePlan(
        should_resize=resize_width or resize_height,
        target_width=target_width,
        target_height=target_height,
    )
