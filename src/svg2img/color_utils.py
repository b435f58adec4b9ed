import logging
import re
from re import Pattern

from svg2img.errors import InvalidBackgroundColor

logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND_COLOR = "FFFFFF"

HEX_DIGITS_RE: Pattern[str] = re.compile(r"[0-9a-fA-F]{6}")


def parse_hex_color(value: str) -> tuple[int, int, int]:
    """Parse an ``RRGGBB`` hex color, with or without a leading ``#``."""
    if not isinstance(value, str):
        raise InvalidBackgroundColor(value, "expected a string")
    digits = value[1:] if value.startswith("#") else value
    if len(digits) != 6:
        raise InvalidBackgroundColor(
            value, f"must be 6 characters (RRGGBB), got {len(digits)}"
        )
    if not HEX_DIGITS_RE.fullmatch(digits):
        raise InvalidBackgroundColor(value, "contains non-hexadecimal characters")
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
