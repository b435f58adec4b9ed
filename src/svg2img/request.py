"""Conversion requests and their validation."""

import dataclasses
import enum
import logging
from collections.abc import Mapping
from typing import Any

from svg2img.errors import (
    InvalidDimension,
    InvalidReplacements,
    MissingFormat,
    ParseError,
    UnsupportedFormat,
)

logger = logging.getLogger(__name__)


class ImageFormat(str, enum.Enum):
    """Supported output container formats."""

    PNG = "png"
    JPG = "jpg"
    JPEG = "jpeg"
    GIF = "gif"
    WEBP = "webp"

    @property
    def pillow_format(self) -> str:
        """Format name understood by ``PIL.Image.save``."""
        if self in (ImageFormat.JPG, ImageFormat.JPEG):
            return "JPEG"
        return self.value.upper()

    @property
    def supports_alpha(self) -> bool:
        """Whether the output keeps a transparent background.

        Only PNG output is transparent; every other format gets an opaque
        background composited beneath the artwork.
        """
        return self is ImageFormat.PNG

    @property
    def mime_type(self) -> str:
        return f"image/{self.pillow_format.lower()}"

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


@dataclasses.dataclass(frozen=True)
class ConversionRequest:
    """A validated conversion request.

    Use :func:`validate_request` to build one from untrusted arguments.
    """

    svg: str
    format: ImageFormat
    width: int | None = None
    height: int | None = None
    background_color: str | None = None
    replacements: tuple[tuple[str, str], ...] = ()


def validate_format(value: Any) -> ImageFormat:
    """Normalize the output format, raising on missing or unknown values."""
    if value is None:
        raise MissingFormat()
    if isinstance(value, ImageFormat):
        return value
    if isinstance(value, str):
        try:
            return ImageFormat(value.lower())
        except ValueError:
            pass
    raise UnsupportedFormat(value, ImageFormat.names())


def validate_dimension(name: str, value: Any) -> int | None:
    """Check that an optional dimension is a positive integer."""
    if value is None:
        return None
    # bool is an int subclass but never a meaningful pixel count.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidDimension(name, value)
    return value


def validate_replacements(value: Any) -> tuple[tuple[str, str], ...]:
    """Flatten a replacement mapping into ordered ``(search, replace)`` pairs."""
    if value is None:
        return ()
    if not isinstance(value, Mapping):
        raise InvalidReplacements(
            f"replacements must be a map, got: {type(value).__name__}"
        )
    pairs = []
    for search, replace in value.items():
        if not isinstance(search, str) or not isinstance(replace, str):
            raise InvalidReplacements(
                f"replacements must be a map of strings, got: {search!r} => {replace!r}"
            )
        pairs.append((search, replace))
    return tuple(pairs)


def validate_request(
    svg: str | bytes,
    format: Any = None,
    width: Any = None,
    height: Any = None,
    background_color: str | None = None,
    replacements: Any = None,
) -> ConversionRequest:
    """Validate raw conversion arguments.

    Args:
        svg: SVG markup, as text or UTF-8 bytes.
        format: Output format name or :class:`ImageFormat`. Required.
        width: Optional output width in pixels.
        height: Optional output height in pixels.
        background_color: Optional hex color, parsed later by the rasterizer.
        replacements: Optional mapping of literal search to replace strings.

    Returns:
        ConversionRequest ready for the pipeline.

    Raises:
        MissingFormat: If no format was given.
        UnsupportedFormat: If the format is not one of :class:`ImageFormat`.
        InvalidDimension: If width or height is not a positive integer.
        InvalidReplacements: If replacements is not a string to string mapping.
        ParseError: If the markup is neither text nor UTF-8 bytes.
    """
    image_format = validate_format(format)
    valid_width = validate_dimension("width", width)
    valid_height = validate_dimension("height", height)
    pairs = validate_replacements(replacements)
    if isinstance(svg, bytes):
        try:
            svg = svg.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"source is not valid UTF-8: {e}") from e
    elif not isinstance(svg, str):
        raise ParseError(f"expected markup text, got {type(svg).__name__}")
    request = ConversionRequest(
        svg=svg,
        format=image_format,
        width=valid_width,
        height=valid_height,
        background_color=background_color,
        replacements=pairs,
    )
    logger.debug(
        "Accepted request: format=%s width=%s height=%s replacements=%d",
        request.format.value,
        request.width,
        request.height,
        len(request.replacements),
    )
    return request
