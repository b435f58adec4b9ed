"""Output canvas size resolution.

When a document has no intrinsic size (no usable width/height attributes and
no viewBox), it is treated as ``DEFAULT_CANVAS_SIZE`` (100x100), the same
default the resvg engine applies to such documents.
"""

import dataclasses
import logging
import math
from typing import Optional

from svg2img.errors import RenderError
from svg2img.resource_limits import ResourceLimits
from svg2img.svg_document import IntrinsicSize

logger = logging.getLogger(__name__)

DEFAULT_CANVAS_SIZE = (100, 100)


@dataclasses.dataclass(frozen=True)
class ResolvedCanvas:
    """Final output size in pixels."""

    width: int
    height: int

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def resolve_dimensions(
    intrinsic_width: float,
    intrinsic_height: float,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> tuple[int, int]:
    """Compute the output size from the intrinsic and requested sizes.

    Both requested: used as-is, even if the aspect ratio changes. One
    requested: the other follows the intrinsic aspect ratio. None requested:
    the intrinsic size, rounded.

    Raises:
        RenderError: If the intrinsic width or height is not positive.
    """
    if not (
        math.isfinite(intrinsic_width)
        and math.isfinite(intrinsic_height)
        and intrinsic_width > 0
        and intrinsic_height > 0
    ):
        raise RenderError(
            f"Degenerate intrinsic size {intrinsic_width}x{intrinsic_height}: "
            "aspect ratio is undefined"
        )

    if width is not None and height is not None:
        final = (width, height)
    elif width is not None:
        final = (width, round_half_away(width * intrinsic_height / intrinsic_width))
    elif height is not None:
        final = (round_half_away(height * intrinsic_width / intrinsic_height), height)
    else:
        final = (round_half_away(intrinsic_width), round_half_away(intrinsic_height))
    return (max(1, final[0]), max(1, final[1]))


def resolve_canvas(
    size: Optional[IntrinsicSize],
    width: Optional[int] = None,
    height: Optional[int] = None,
    limits: Optional[ResourceLimits] = None,
) -> ResolvedCanvas:
    """Resolve the canvas for a document, applying the default size and limits."""
    if size is None:
        logger.debug("No intrinsic size, using default %s", DEFAULT_CANVAS_SIZE)
        intrinsic = DEFAULT_CANVAS_SIZE
    else:
        intrinsic = (size.width, size.height)

    canvas = ResolvedCanvas(*resolve_dimensions(intrinsic[0], intrinsic[1], width, height))

    limits = limits or ResourceLimits.default()
    if limits.is_image_dimension_limited():
        largest = max(canvas.width, canvas.height)
        if largest > limits.max_image_dimension:
            raise RenderError(
                f"Canvas {canvas.width}x{canvas.height} exceeds maximum dimension "
                f"{limits.max_image_dimension}. "
                f"To process: set SVG2IMG_MAX_IMAGE_DIMENSION={largest} environment "
                f"variable, or use ResourceLimits(max_image_dimension={largest})."
            )
    logger.debug("Resolved canvas: %dx%d", canvas.width, canvas.height)
    return canvas
