from logging import getLogger

from svg2img.converter import ConversionResult, Converter, convert
from svg2img.errors import (
    ConversionError,
    EncodeError,
    InvalidBackgroundColor,
    InvalidDimension,
    InvalidReplacements,
    MissingFormat,
    ParseError,
    RenderError,
    UnsupportedFormat,
    ValidationError,
)
from svg2img.image_utils import EncodedImage
from svg2img.request import ConversionRequest, ImageFormat
from svg2img.resource_limits import ResourceLimits
from svg2img.svg_document import SVGDocument
from svg2img.version import __version__ as __version__

logger = getLogger(__name__)

__all__ = [
    "ConversionError",
    "ConversionRequest",
    "ConversionResult",
    "Converter",
    "EncodeError",
    "EncodedImage",
    "ImageFormat",
    "InvalidBackgroundColor",
    "InvalidDimension",
    "InvalidReplacements",
    "MissingFormat",
    "ParseError",
    "RenderError",
    "ResourceLimits",
    "SVGDocument",
    "UnsupportedFormat",
    "ValidationError",
    "convert",
]
