"""Encoding of rendered images into container formats.

Each :class:`~svg2img.request.ImageFormat` maps to one encoder in
``ENCODERS``. Encoders take an RGBA (or RGB) PIL image whose background is
already composited and return the complete file bytes.
"""

import base64
import dataclasses
import io
import logging
from typing import Callable

from PIL import Image

from svg2img.errors import EncodeError
from svg2img.request import ImageFormat
from svg2img.resource_limits import WEBP_MAX_DIMENSION

logger = logging.getLogger(__name__)

JPEG_QUALITY = 90

ACCEPTED_MODES = ("RGBA", "RGB")


@dataclasses.dataclass(frozen=True)
class EncodedImage:
    """Encoded image bytes tagged with their container format."""

    data: bytes
    format: ImageFormat
    width: int
    height: int

    @property
    def mime_type(self) -> str:
        return self.format.mime_type

    def to_data_uri(self) -> str:
        """Encode the image as a base64 data URI."""
        base64_data = base64.b64encode(self.data).decode("utf-8")
        return f"data:{self.mime_type};base64,{base64_data}"

    def __bytes__(self) -> bytes:
        return self.data


def _save(image: Image.Image, format: str, **params) -> bytes:
    with io.BytesIO() as output:
        image.save(output, format=format, **params)
        return output.getvalue()


def encode_png(image: Image.Image) -> bytes:
    # No text/time chunks, so IEND stays last and output is reproducible.
    return _save(image.convert("RGBA"), "PNG")


def encode_jpeg(image: Image.Image) -> bytes:
    # JPEG has no alpha; the background is expected to be composited already.
    return _save(image.convert("RGB"), "JPEG", quality=JPEG_QUALITY)


def encode_gif(image: Image.Image) -> bytes:
    paletted = image.convert("RGB").convert(
        "P", palette=Image.Palette.ADAPTIVE, colors=256
    )
    return _save(paletted, "GIF")


def encode_webp(image: Image.Image) -> bytes:
    if max(image.size) > WEBP_MAX_DIMENSION:
        raise EncodeError(
            f"WebP supports at most {WEBP_MAX_DIMENSION} pixels per side, "
            f"got {image.size[0]}x{image.size[1]}"
        )
    if image.mode == "RGBA" and image.getextrema()[3][0] == 255:
        # Fully opaque: drop the alpha channel.
        image = image.convert("RGB")
    return _save(image, "WEBP", lossless=True)


ENCODERS: dict[ImageFormat, Callable[[Image.Image], bytes]] = {
    ImageFormat.PNG: encode_png,
    ImageFormat.JPG: encode_jpeg,
    ImageFormat.JPEG: encode_jpeg,
    ImageFormat.GIF: encode_gif,
    ImageFormat.WEBP: encode_webp,
}


def encode_image(image: Image.Image, format: ImageFormat) -> EncodedImage:
    """Encode a rendered image into the requested container format.

    Args:
        image: PIL image in RGBA or RGB mode. It is not modified.
        format: Target container format.

    Returns:
        EncodedImage with the complete file bytes.

    Raises:
        EncodeError: If the image mode is not supported or the codec fails.
    """
    if image.mode not in ACCEPTED_MODES:
        raise EncodeError(
            f"Cannot encode {image.mode} image as {format.value}, "
            f"expected one of {', '.join(ACCEPTED_MODES)}"
        )
    encoder = ENCODERS[format]
    try:
        data = encoder(image)
    except EncodeError:
        raise
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to encode {format.value.upper()}: {e}") from e
    logger.debug("Encoded %s: %d bytes", format.value, len(data))
    return EncodedImage(data=data, format=format, width=image.width, height=image.height)


def decode_image(data: bytes, mode: str | None = None) -> Image.Image:
    """Decode image data from bytes to a PIL image."""
    with io.BytesIO(data) as input:
        image = Image.open(input)
        image.load()
    if mode is not None:
        return image.convert(mode)
    return image
