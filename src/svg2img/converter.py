import dataclasses
import logging
from typing import Any, Mapping, Optional

from svg2img.color_utils import DEFAULT_BACKGROUND_COLOR, parse_hex_color
from svg2img.dimensions import resolve_canvas
from svg2img.errors import ConversionError
from svg2img.image_utils import EncodedImage, encode_image
from svg2img.preprocess import apply_replacements
from svg2img.rasterizer import BaseRasterizer, ResvgRasterizer
from svg2img.request import ConversionRequest, ImageFormat, validate_request
from svg2img.resource_limits import ResourceLimits
from svg2img.svg_document import SVGDocument

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ConversionResult:
    """Outcome of :func:`convert`: image bytes or the error that stopped it.

    Example::

        result = convert(svg, format="png", width=800)
        if result.ok:
            open("output.png", "wb").write(result.data)
        else:
            print(result.code, result.message)
    """

    data: Optional[bytes] = None
    error: Optional[ConversionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def code(self) -> Optional[str]:
        """Failure tag such as ``"ParseError"``, or None on success."""
        return self.error.code if self.error is not None else None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None

    def unwrap(self) -> bytes:
        """Return the image bytes, or raise the stored error."""
        if self.error is not None:
            raise self.error
        if self.data is None:
            raise ValueError("ConversionResult holds neither data nor an error")
        return self.data


class Converter:
    """SVG to raster image converter.

    The converter holds no per-request state; one instance can serve many
    requests, including from several threads at once.

    Args:
        limits: Resource limits. Defaults to ``ResourceLimits.default()``.
        rasterizer: Rendering backend. Defaults to :class:`ResvgRasterizer`.
    """

    def __init__(
        self,
        limits: Optional[ResourceLimits] = None,
        rasterizer: Optional[BaseRasterizer] = None,
    ) -> None:
        self.limits = limits or ResourceLimits.default()
        self.rasterizer = rasterizer or ResvgRasterizer()

    def convert(
        self,
        svg: str,
        format: Any = None,
        width: Any = None,
        height: Any = None,
        background_color: Optional[str] = None,
        replacements: Optional[Mapping[str, str]] = None,
    ) -> EncodedImage:
        """Validate the arguments and run the pipeline.

        Raises:
            ConversionError: The first failure encountered.
        """
        request = validate_request(
            svg,
            format=format,
            width=width,
            height=height,
            background_color=background_color,
            replacements=replacements,
        )
        return self.run(request)

    def run(self, request: ConversionRequest) -> EncodedImage:
        """Run a validated request through the pipeline.

        Raises:
            ConversionError: The first failure encountered.
        """
        svg = apply_replacements(request.svg, request.replacements)
        document = SVGDocument.from_string(svg, limits=self.limits)
        canvas = resolve_canvas(
            document.size, request.width, request.height, limits=self.limits
        )
        background = self.get_background(request)
        image = self.rasterizer.rasterize(document, canvas, background)
        return encode_image(image, request.format)

    @staticmethod
    def get_background(request: ConversionRequest) -> Optional[tuple[int, int, int]]:
        """Background color for the request, or None for a transparent canvas."""
        if request.format.supports_alpha:
            if request.background_color is not None:
                logger.debug(
                    "Ignoring background color %r for %s output",
                    request.background_color,
                    request.format.value,
                )
            return None
        return parse_hex_color(request.background_color or DEFAULT_BACKGROUND_COLOR)


def convert(
    svg: str,
    format: ImageFormat | str | None = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    background_color: Optional[str] = None,
    replacements: Optional[Mapping[str, str]] = None,
    limits: Optional[ResourceLimits] = None,
) -> ConversionResult:
    """Convert SVG markup to image bytes.

    Args:
        svg: SVG markup.
        format: Output format, one of ``png``, ``jpg``, ``jpeg``, ``gif`` or
            ``webp``. Required.
        width: Output width in pixels. If only width is given, height follows
            the document's aspect ratio.
        height: Output height in pixels. If only height is given, width follows
            the document's aspect ratio. With both, the output has exactly
            that size.
        background_color: Hex color (``"FF0000"`` or ``"#FF0000"``) beneath the
            artwork. Ignored for PNG, which keeps transparency. Defaults to
            white.
        replacements: Literal string replacements applied to the markup, in
            order, before parsing.
        limits: Resource limits. Defaults to ``ResourceLimits.default()``.

    Returns:
        ConversionResult holding the image bytes, or the error. Conversion
        errors are never raised from this function.
    """
    try:
        converter = Converter(limits=limits)
        encoded = converter.convert(
            svg,
            format=format,
            width=width,
            height=height,
            background_color=background_color,
            replacements=replacements,
        )
    except ConversionError as e:
        logger.debug("Conversion failed: %s: %s", e.code, e)
        return ConversionResult(error=e)
    return ConversionResult(data=encoded.data)
