import logging
import os
from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Optional, Union

from PIL import Image

from svg2img import svg_utils
from svg2img.dimensions import DEFAULT_CANVAS_SIZE, ResolvedCanvas
from svg2img.errors import RenderError
from svg2img.svg_document import SVGDocument

logger = logging.getLogger(__name__)

TRANSPARENT = (255, 255, 255, 0)


class BaseRasterizer(ABC):
    """Base class for SVG rasterizer implementations.

    This abstract base class defines the interface for converting SVG documents
    to raster images (PIL Image objects). Subclasses must implement the
    `from_string` method to provide the actual rasterization logic.
    """

    @abstractmethod
    def from_string(self, svg_content: Union[str, bytes]) -> Image.Image:
        """Rasterize SVG content at its own size to an RGBA PIL Image.

        Args:
            svg_content: SVG content as string or bytes.

        Returns:
            PIL Image object in RGBA mode over a transparent background.

        Raises:
            RenderError: If the engine cannot render the content.
        """
        raise NotImplementedError

    def from_file(self, filepath: Union[str, os.PathLike]) -> Image.Image:
        """Rasterize an SVG file to a PIL Image."""
        with open(filepath, "rb") as f:
            return self.from_string(f.read())

    def rasterize(
        self,
        document: SVGDocument,
        canvas: ResolvedCanvas,
        background: Optional[tuple[int, int, int]] = None,
    ) -> Image.Image:
        """Render a document onto a canvas of the given size.

        Args:
            document: Parsed document. It is not modified.
            canvas: Output size. Geometry is scaled from the intrinsic size to
                the canvas, non-uniformly if the aspect ratios differ.
            background: Opaque RGB color beneath the artwork, or None to keep
                the canvas transparent.

        Returns:
            PIL Image in RGBA mode of exactly ``canvas.size``.

        Raises:
            RenderError: If rendering fails or yields the wrong size.
        """
        try:
            svg_content = self.prepare_svg(document, canvas)
        except RecursionError as e:
            raise RenderError("Document is nested too deeply to serialize") from e
        image = self.from_string(svg_content)
        if image.size != canvas.size:
            raise RenderError(
                f"Rendered size {image.size[0]}x{image.size[1]} does not match "
                f"canvas {canvas.width}x{canvas.height}"
            )
        if background is None:
            return self._composite_background(image)
        return self._composite_background(image, (*background, 255))

    @staticmethod
    def prepare_svg(document: SVGDocument, canvas: ResolvedCanvas) -> str:
        """Nest the document in an outer ``svg`` that maps it onto the canvas.

        The document root keeps its own viewBox and preserveAspectRatio and is
        sized to its intrinsic size; the outer element stretches that box to
        the canvas.
        """
        if document.size is None:
            width, height = DEFAULT_CANVAS_SIZE
        else:
            width, height = document.size.width, document.size.height

        svg = deepcopy(document.svg)
        # x/y are ignored on an outermost svg but honored on a nested one.
        svg.attrib.pop("x", None)
        svg.attrib.pop("y", None)
        svg_utils.set_attribute(svg, "width", width)
        svg_utils.set_attribute(svg, "height", height)

        wrapper = svg_utils.create_node(
            "svg",
            width=canvas.width,
            height=canvas.height,
            viewBox=[0, 0, width, height],
            preserveAspectRatio="none",
        )
        svg_utils.wrap_element(svg, wrapper)
        return svg_utils.tostring(wrapper)

    def _composite_background(
        self, image: Image.Image, color: tuple[int, int, int, int] = TRANSPARENT
    ) -> Image.Image:
        """Composite image over a solid background with source-over blending.

        With the default fully transparent color this only normalizes the
        alpha channel of the rendered image.

        Args:
            image: Input PIL Image, typically with RGBA mode.
            color: RGBA background color.

        Returns:
            New PIL Image in RGBA mode.
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        background = Image.new("RGBA", size=image.size, color=color)
        background.alpha_composite(image)
        return background
