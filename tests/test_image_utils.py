"""Tests for container encoders."""

import struct

import pytest
from PIL import Image

from conftest import requires_webp
from format_checks import (
    PNG_IEND,
    gif_size,
    is_valid_gif,
    is_valid_jpeg,
    is_valid_png,
    is_valid_webp,
    jpeg_size,
    png_size,
    webp_chunk,
    webp_size,
)
from svg2img.errors import EncodeError
from svg2img.image_utils import (
    ENCODERS,
    EncodedImage,
    decode_image,
    encode_image,
)
from svg2img.request import ImageFormat
from svg2img.resource_limits import WEBP_MAX_DIMENSION


@pytest.fixture
def rgba_image() -> Image.Image:
    image = Image.new("RGBA", (30, 20), (255, 255, 255, 0))
    image.paste((255, 0, 0, 255), (5, 5, 25, 15))
    return image


@pytest.fixture
def opaque_image() -> Image.Image:
    image = Image.new("RGBA", (30, 20), (0, 0, 255, 255))
    image.paste((255, 0, 0, 255), (5, 5, 25, 15))
    return image


def test_every_format_has_an_encoder() -> None:
    assert set(ENCODERS) == set(ImageFormat)


class TestPNG:
    def test_layout(self, rgba_image: Image.Image) -> None:
        encoded = encode_image(rgba_image, ImageFormat.PNG)
        data = encoded.data
        assert is_valid_png(data)
        assert data[8:16] == b"\x00\x00\x00\rIHDR"
        assert png_size(data) == (30, 20)
        assert data[-12:] == PNG_IEND

    def test_alpha_preserved(self, rgba_image: Image.Image) -> None:
        decoded = decode_image(encode_image(rgba_image, ImageFormat.PNG).data)
        assert decoded.mode == "RGBA"
        assert decoded.getpixel((0, 0))[3] == 0
        assert decoded.getpixel((10, 10)) == (255, 0, 0, 255)

    def test_deterministic(self, rgba_image: Image.Image) -> None:
        first = encode_image(rgba_image, ImageFormat.PNG).data
        assert encode_image(rgba_image.copy(), ImageFormat.PNG).data == first


class TestJPEG:
    @pytest.mark.parametrize("image_format", [ImageFormat.JPG, ImageFormat.JPEG])
    def test_layout(self, opaque_image: Image.Image, image_format: ImageFormat) -> None:
        data = encode_image(opaque_image, image_format).data
        assert is_valid_jpeg(data)
        assert jpeg_size(data) == (30, 20)

    def test_no_alpha(self, opaque_image: Image.Image) -> None:
        decoded = decode_image(encode_image(opaque_image, ImageFormat.JPG).data)
        assert decoded.mode == "RGB"
        r, g, b = decoded.getpixel((15, 10))
        assert r > 200 and g < 60 and b < 60


class TestGIF:
    def test_layout(self, opaque_image: Image.Image) -> None:
        data = encode_image(opaque_image, ImageFormat.GIF).data
        assert is_valid_gif(data)
        assert gif_size(data) == (30, 20)
        assert data[-1] == 0x3B

    def test_colors(self, opaque_image: Image.Image) -> None:
        decoded = decode_image(encode_image(opaque_image, ImageFormat.GIF).data, "RGB")
        assert decoded.getpixel((15, 10)) == (255, 0, 0)
        assert decoded.getpixel((1, 1)) == (0, 0, 255)


@requires_webp
class TestWebP:
    def test_layout(self, opaque_image: Image.Image) -> None:
        data = encode_image(opaque_image, ImageFormat.WEBP).data
        assert is_valid_webp(data)
        (riff_size,) = struct.unpack("<I", data[4:8])
        assert riff_size == len(data) - 8
        assert webp_chunk(data) in (b"VP8L", b"VP8X")
        assert webp_size(data) == (30, 20)

    def test_lossless(self, opaque_image: Image.Image) -> None:
        decoded = decode_image(encode_image(opaque_image, ImageFormat.WEBP).data, "RGBA")
        assert decoded.tobytes() == opaque_image.tobytes()

    def test_transparent_input(self, rgba_image: Image.Image) -> None:
        data = encode_image(rgba_image, ImageFormat.WEBP).data
        assert is_valid_webp(data)
        assert webp_size(data) == (30, 20)

    def test_dimension_limit(self) -> None:
        image = Image.new("RGB", (WEBP_MAX_DIMENSION + 1, 1))
        with pytest.raises(EncodeError, match="WebP supports at most"):
            encode_image(image, ImageFormat.WEBP)


class TestEncodeErrors:
    @pytest.mark.parametrize("mode", ["L", "P", "CMYK", "I;16", "F"])
    def test_unsupported_mode(self, mode: str) -> None:
        with pytest.raises(EncodeError, match=f"Cannot encode {mode} image"):
            encode_image(Image.new(mode, (4, 4)), ImageFormat.PNG)

    def test_codec_failure(
        self, monkeypatch: pytest.MonkeyPatch, opaque_image: Image.Image
    ) -> None:
        def broken_save(self: Image.Image, *args: object, **kwargs: object) -> None:
            raise OSError("encoder error -2")

        monkeypatch.setattr(Image.Image, "save", broken_save)
        with pytest.raises(EncodeError, match="Failed to encode GIF") as excinfo:
            encode_image(opaque_image, ImageFormat.GIF)
        assert isinstance(excinfo.value.__cause__, OSError)


class TestEncodedImage:
    def test_metadata(self, rgba_image: Image.Image) -> None:
        encoded = encode_image(rgba_image, ImageFormat.JPEG)
        assert (encoded.width, encoded.height) == (30, 20)
        assert encoded.format is ImageFormat.JPEG
        assert encoded.mime_type == "image/jpeg"
        assert bytes(encoded) == encoded.data

    def test_data_uri(self) -> None:
        encoded = EncodedImage(data=b"abc", format=ImageFormat.PNG, width=1, height=1)
        assert encoded.to_data_uri() == "data:image/png;base64,YWJj"

    def test_source_not_modified(self, rgba_image: Image.Image) -> None:
        before = rgba_image.tobytes()
        for image_format in (ImageFormat.PNG, ImageFormat.JPG, ImageFormat.GIF):
            encode_image(rgba_image, image_format)
        assert rgba_image.mode == "RGBA"
        assert rgba_image.tobytes() == before
