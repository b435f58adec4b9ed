import logging
import xml.etree.ElementTree as ET
from typing import Union

import pytest
from PIL import Image, features

from svg2img.rasterizer import BaseRasterizer

logger = logging.getLogger(__name__)


def has_webp() -> bool:
    """Check if Pillow was built with WebP support."""
    return bool(features.check("webp"))


requires_webp = pytest.mark.skipif(
    not has_webp(),
    reason="Pillow built without WebP support",
)


def nested_svg(count: int) -> str:
    """Return a 10x10 document with a rect inside ``count`` nested groups."""
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10">'
        + "<g>" * count
        + '<rect width="10" height="10" fill="red"/>'
        + "</g>" * count
        + "</svg>"
    )


class FakeRasterizer(BaseRasterizer):
    """Rasterizer that paints nothing and records the markup it was given."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def from_string(self, svg_content: Union[str, bytes]) -> Image.Image:
        svg_string = (
            svg_content.decode("utf-8")
            if isinstance(svg_content, bytes)
            else svg_content
        )
        self.calls.append(svg_string)
        root = ET.fromstring(svg_string)
        size = (int(float(root.get("width"))), int(float(root.get("height"))))
        return Image.new("RGBA", size, (0, 0, 0, 0))


@pytest.fixture
def fake_rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def simple_svg() -> str:
    """100x100 document with a red square inset by 10px."""
    return """<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">
  <rect x="10" y="10" width="80" height="80" fill="#FF0000" />
</svg>"""


@pytest.fixture
def complex_svg() -> str:
    """Document with several shape kinds, a gradient, a transform and text."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200" viewBox="0 0 200 200">
  <defs>
    <linearGradient id="grad1" x1="0%" y1="0%" x2="100%" y2="100%">
      <stop offset="0%" style="stop-color:rgb(255,255,0);stop-opacity:1" />
      <stop offset="100%" style="stop-color:rgb(255,0,0);stop-opacity:1" />
    </linearGradient>
  </defs>
  <rect x="0" y="0" width="200" height="200" fill="url(#grad1)" />
  <circle cx="100" cy="100" r="50" fill="#0000FF" opacity="0.5" />
  <g transform="rotate(45 100 100)">
    <rect x="75" y="75" width="50" height="50" fill="#00FF00" />
  </g>
  <path d="M 10 190 L 190 190 L 100 150 Z" fill="none" stroke="#000000" stroke-width="3" />
  <text x="100" y="180" text-anchor="middle" font-size="20" fill="#000000">Test</text>
</svg>"""


@pytest.fixture
def replaceable_svg() -> str:
    """Document with colors that replacements can target."""
    return """<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">
  <rect x="10" y="10" width="40" height="40" fill="#000000" />
  <rect x="50" y="50" width="40" height="40" fill="blue" />
</svg>"""


@pytest.fixture
def viewbox_only_svg() -> str:
    """Document sized by its viewBox alone."""
    return """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 100">
  <circle cx="100" cy="50" r="40" fill="#FF00FF" />
</svg>"""


@pytest.fixture
def unsized_svg() -> str:
    """Document with neither width/height nor viewBox."""
    return """<svg xmlns="http://www.w3.org/2000/svg">
  <rect x="0" y="0" width="50" height="50" fill="#00FF00" />
</svg>"""


@pytest.fixture
def wide_svg() -> str:
    """200x100 document filled with red."""
    return """<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100">
  <rect width="200" height="100" fill="#FF0000" />
</svg>"""


@pytest.fixture
def invalid_svg() -> str:
    return "<svg>This is not valid SVG"
