import pytest

from svg2img.color_utils import DEFAULT_BACKGROUND_COLOR, parse_hex_color
from svg2img.errors import InvalidBackgroundColor


@pytest.mark.parametrize(
    "value,expected",
    [
        ("FF0000", (255, 0, 0)),
        ("#00ff00", (0, 255, 0)),
        ("#0000FF", (0, 0, 255)),
        ("1a2B3c", (26, 43, 60)),
        (DEFAULT_BACKGROUND_COLOR, (255, 255, 255)),
    ],
)
def test_parse_hex_color(value: str, expected: tuple[int, int, int]) -> None:
    assert parse_hex_color(value) == expected


@pytest.mark.parametrize(
    "value", ["", "#", "FFF", "#FFF", "FFFFFFF", "##FFFFFF", "GGGGGG", "FF 000", "12345\n"]
)
def test_invalid(value: str) -> None:
    with pytest.raises(InvalidBackgroundColor, match="Invalid hex color"):
        parse_hex_color(value)


def test_non_string() -> None:
    with pytest.raises(InvalidBackgroundColor) as excinfo:
        parse_hex_color(0xFFFFFF)  # type: ignore[arg-type]
    assert excinfo.value.value == 0xFFFFFF
