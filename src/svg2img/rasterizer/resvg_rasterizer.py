"""Resvg-based rasterizer module.

This module provides SVG rasterization using the resvg library via resvg-py,
offering fast and accurate rendering with no external dependencies.
"""

import logging
import re
from io import BytesIO
from typing import Union
from urllib.parse import unquote, urlparse

import resvg_py
from PIL import Image

from svg2img.errors import RenderError

from .base_rasterizer import BaseRasterizer

logger = logging.getLogger(__name__)

FONT_FACE_SRC_RE = re.compile(r'src:\s*url\(\s*["\']?(file://[^"\')]+)["\']?\s*\)')


class ResvgRasterizer(BaseRasterizer):
    """SVG rasterizer using resvg.

    Resvg is a fast, accurate SVG renderer written in Rust. It covers the
    static subset of SVG: shapes, paths, gradients, patterns, text,
    transforms, clipping and masking.

    Note:
        Resvg does not support CSS @font-face rules. Font files referenced by
        ``src: url("file://...")`` declarations are passed to resvg's font
        loading API instead; data URIs are ignored.

    Example:
        >>> rasterizer = ResvgRasterizer()
        >>> image = rasterizer.from_string('<svg>...</svg>')
        >>> image.save('output.png')
    """

    def __init__(self, dpi: int = 0) -> None:
        """Initialize the resvg rasterizer.

        Args:
            dpi: Dots per inch used to resolve physical units inside the
                document. If 0 (default), uses resvg's default of 96 DPI.
        """
        self.dpi = dpi

    @staticmethod
    def _extract_font_file_paths(svg_content: str) -> list[str]:
        """Extract local font file paths from @font-face rules."""
        return [
            unquote(urlparse(url).path) for url in FONT_FACE_SRC_RE.findall(svg_content)
        ]

    def from_string(
        self, svg_content: Union[str, bytes], font_files: list[str] | None = None
    ) -> Image.Image:
        """Rasterize SVG content from a string to a PIL Image.

        If font_files is not provided, font paths are extracted from
        @font-face CSS rules in the SVG content (file:// URLs).

        Args:
            svg_content: SVG content as string or bytes.
            font_files: Optional list of font file paths to use for rendering.

        Returns:
            PIL Image object in RGBA mode containing the rasterized SVG.

        Raises:
            RenderError: If resvg rejects the content.
        """
        svg_string = (
            svg_content.decode("utf-8")
            if isinstance(svg_content, bytes)
            else svg_content
        )

        if font_files is None:
            font_files = self._extract_font_file_paths(svg_string)
            if font_files:
                logger.debug(f"Extracted {len(font_files)} font file(s) from SVG")

        try:
            png_bytes = resvg_py.svg_to_bytes(
                svg_string=svg_string, dpi=int(self.dpi), font_files=font_files
            )
            image = Image.open(BytesIO(bytes(png_bytes)))
            image.load()
        except Exception as e:
            # resvg_py surfaces engine failures as generic Python exceptions.
            raise RenderError(f"Failed to render SVG: {e}") from e
        return self._composite_background(image)
