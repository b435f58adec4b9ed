import dataclasses
import logging
import os
import xml.etree.ElementTree as ET
from copy import deepcopy
from typing import Optional

from svg2img import svg_utils
from svg2img.errors import ParseError
from svg2img.resource_limits import ResourceLimits

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class IntrinsicSize:
    """Natural size of a document in CSS pixels.

    ``source`` tells where the size came from: ``"attributes"`` for the root
    width/height attributes, ``"viewbox"`` for the viewBox.
    """

    width: float
    height: float
    source: str = "attributes"

    @property
    def is_degenerate(self) -> bool:
        return not (self.width > 0 and self.height > 0)


@dataclasses.dataclass
class SVGDocument:
    """Parsed SVG document.

    Example usage::

        from svg2img import SVGDocument

        document = SVGDocument.from_string(svg_text)
        document.size  # IntrinsicSize or None
        svg_string = document.tostring()

    The element tree is the scene graph handed to the rasterizer. Later
    pipeline stages only read it; the rasterizer works on a copy.
    """

    svg: ET.Element
    size: Optional[IntrinsicSize] = None

    @staticmethod
    def from_string(
        data: str, limits: Optional[ResourceLimits] = None
    ) -> "SVGDocument":
        """Parse SVG markup.

        Args:
            data: SVG markup.
            limits: Resource limits; the source size limit applies to the
                UTF-8 encoded markup. Defaults to ``ResourceLimits.default()``.

        Returns:
            SVGDocument with its intrinsic size resolved.

        Raises:
            ParseError: If the markup is empty, too large, too deeply nested,
                not well-formed, or its root element is not ``svg``.
        """
        limits = limits or ResourceLimits.default()
        if not isinstance(data, str):
            raise ParseError(f"expected markup text, got {type(data).__name__}")
        if limits.is_source_size_limited():
            size = len(data.encode("utf-8"))
            if size > limits.max_source_size:
                raise ParseError(
                    f"source is {size} bytes, exceeding the limit of "
                    f"{limits.max_source_size} bytes"
                )
        if not data.strip():
            raise ParseError("document is empty")

        try:
            svg = svg_utils.fromstring(data)
        except ET.ParseError as e:
            raise ParseError(str(e)) from e

        name = svg_utils.local_name(svg.tag)
        namespace = svg_utils.namespace_of(svg.tag)
        if name != "svg" or namespace not in ("", svg_utils.NAMESPACE):
            raise ParseError(f"root element is {svg.tag!r}, expected 'svg'")
        if limits.is_depth_limited():
            depth = get_depth(svg)
            if depth > limits.max_depth:
                raise ParseError(
                    f"elements are nested {depth} levels deep, exceeding the "
                    f"limit of {limits.max_depth} levels"
                )
        if not namespace:
            logger.debug("Root element has no namespace, assuming SVG")
            svg_utils.adopt_namespace(svg)

        size = get_intrinsic_size(svg)
        logger.debug("Parsed SVG document, intrinsic size: %s", size)
        return SVGDocument(svg=svg, size=size)

    @staticmethod
    def from_file(
        filepath: str | os.PathLike, limits: Optional[ResourceLimits] = None
    ) -> "SVGDocument":
        """Parse an SVG file. See :meth:`from_string`."""
        with open(filepath, encoding="utf-8") as f:
            return SVGDocument.from_string(f.read(), limits=limits)

    @property
    def viewbox(self) -> Optional[tuple[float, float, float, float]]:
        return svg_utils.parse_viewbox(self.svg.get("viewBox"))

    def copy(self) -> "SVGDocument":
        """Return a deep copy of the document."""
        return SVGDocument(svg=deepcopy(self.svg), size=self.size)

    def tostring(self) -> str:
        """Serialize the document to SVG markup."""
        return svg_utils.tostring(self.svg)


def get_intrinsic_size(svg: ET.Element) -> Optional[IntrinsicSize]:
    """Resolve the natural size of a root ``svg`` element.

    Both width and height attributes win. With only one of them, the other is
    derived from the viewBox aspect ratio. Otherwise the viewBox size is used.
    Returns None when there is nothing to derive a size from.
    """
    width = svg_utils.parse_length(svg.get("width"))
    height = svg_utils.parse_length(svg.get("height"))
    viewbox = svg_utils.parse_viewbox(svg.get("viewBox"))

    if width is not None and height is not None:
        return IntrinsicSize(width, height, "attributes")

    if viewbox is None:
        if width is not None or height is not None:
            logger.debug("Only one of width/height given and no viewBox")
        return None

    vb_width, vb_height = viewbox[2], viewbox[3]
    if width is not None and vb_width > 0:
        return IntrinsicSize(width, width * vb_height / vb_width, "attributes")
    if height is not None and vb_height > 0:
        return IntrinsicSize(height * vb_width / vb_height, height, "attributes")
    return IntrinsicSize(vb_width, vb_height, "viewbox")


def get_depth(svg: ET.Element) -> int:
    """Return the nesting depth of an element tree; a lone root is depth 1."""
    depth = 0
    stack = [(svg, 1)]
    while stack:
        node, level = stack.pop()
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in node)
    return depth
