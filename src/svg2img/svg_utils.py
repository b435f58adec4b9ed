import logging
import math
import re
import xml.etree.ElementTree as ET
from re import Pattern
from typing import Any, Optional, Sequence

logger = logging.getLogger(__name__)

NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"

# Serialize SVG elements without ns0: prefixes.
ET.register_namespace("", NAMESPACE)
ET.register_namespace("xlink", XLINK_NAMESPACE)

DEFAULT_NUMBER_DIGITS = 4

# CSS absolute units in px at 96 DPI. Font-relative units use a 16px font.
UNITS_TO_PX: dict[str, float] = {
    "": 1.0,
    "px": 1.0,
    "in": 96.0,
    "cm": 96.0 / 2.54,
    "mm": 96.0 / 25.4,
    "pt": 96.0 / 72.0,
    "pc": 16.0,
    "em": 16.0,
    "ex": 8.0,
}

LENGTH_RE: Pattern[str] = re.compile(
    r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*([a-zA-Z]*|%)\s*$"
)
LIST_SEPARATOR_RE: Pattern[str] = re.compile(r"[\s,]+")


def num2str(num: int | float | bool, digit: int = DEFAULT_NUMBER_DIGITS) -> str:
    """Convert a number to a string, using the specified format for floats."""
    if isinstance(num, bool):
        return "true" if num else "false"
    if isinstance(num, int):
        return str(num)
    if isinstance(num, float):
        if num.is_integer():
            return str(int(num))
        # Format float with specified number of digits, and trim trailing zeros
        number = f"{num:.{digit}f}"
        return f"{number[0]}{number[1:].rstrip('0').rstrip('.')}"
    raise ValueError(f"Unsupported type: {type(num)}")


def seq2str(
    seq: Sequence[int | float | bool],
    sep: str = " ",
    digit: int = DEFAULT_NUMBER_DIGITS,
) -> str:
    """Convert a sequence of numbers to a string, using the specified format for floats."""
    return sep.join(num2str(n, digit) for n in seq)


def create_node(
    tag: str,
    parent: Optional[ET.Element] = None,
    **kwargs: Any,
) -> ET.Element:
    """Create an SVG element with attributes.

    Keyword arguments become attributes; a trailing underscore is stripped and
    underscores map to hyphens. ``None`` values are skipped.
    """
    node = ET.Element(qualify(tag))
    for key, value in kwargs.items():
        if value is None:
            continue
        key = key.rstrip("_")
        key = key.replace("_", "-")
        set_attribute(node, key, value)
    if parent is not None:
        parent.append(node)
    return node


def set_attribute(node: ET.Element, key: str, value: Any) -> None:
    """Add an attribute to an XML node."""
    if isinstance(value, (int, float, bool)):
        node.set(key, num2str(value))
    elif isinstance(value, (list, tuple)) and all(
        isinstance(v, (int, float, bool)) for v in value
    ):
        node.set(key, seq2str(value))
    else:
        node.set(key, str(value))


def qualify(tag: str) -> str:
    """Return the tag in the SVG namespace (Clark notation)."""
    if tag.startswith("{"):
        return tag
    return f"{{{NAMESPACE}}}{tag}"


def local_name(tag: Any) -> str:
    """Strip the namespace from a Clark-notation tag."""
    if not isinstance(tag, str):
        # Comments and processing instructions.
        return ""
    return tag.rsplit("}", 1)[-1]


def namespace_of(tag: str) -> str:
    if tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return ""


def adopt_namespace(node: ET.Element) -> None:
    """Move un-namespaced elements into the SVG namespace, recursively."""
    for element in node.iter():
        if isinstance(element.tag, str) and not element.tag.startswith("{"):
            element.tag = qualify(element.tag)


def fromstring(data: str) -> ET.Element:
    """Parse an XML string to an Element."""
    return ET.fromstring(data)


def tostring(node: ET.Element) -> str:
    """Convert an XML node to a string without reformatting whitespace."""
    return ET.tostring(node, encoding="unicode", xml_declaration=False)


def wrap_element(
    node: ET.Element, wrapper: ET.Element, parent: Optional[ET.Element] = None
) -> ET.Element:
    """Wrap the given node in the wrapper element.

    Usage::
        wrapper = svg_utils.create_node("svg")
        wrapped = svg_utils.wrap_element(root, wrapper)

    Args:
        node: The XML node to be wrapped.
        wrapper: The wrapper XML node.
        parent: The parent containing the node, or None for a root node.
    """
    if parent is not None:
        # NOTE: There is no direct way to find a parent from the node.
        if node not in parent:
            raise ValueError(
                f"Node is not a child of the given parent: {node} in {parent}"
            )
        index = list(parent).index(node)
        parent.remove(node)
        parent.insert(index, wrapper)
    wrapper.append(node)
    return wrapper


def parse_length(value: Optional[str]) -> Optional[float]:
    """Parse an SVG length attribute into CSS pixels.

    Returns None for missing, percentage, or unparseable values.
    """
    if value is None:
        return None
    match = LENGTH_RE.match(value)
    if match is None:
        logger.warning("Ignoring unparseable length: %r", value)
        return None
    number, unit = match.groups()
    if unit == "%":
        return None
    scale = UNITS_TO_PX.get(unit.lower())
    if scale is None:
        logger.warning("Ignoring length with unknown unit: %r", value)
        return None
    length = float(number) * scale
    if not math.isfinite(length):
        logger.warning("Ignoring non-finite length: %r", value)
        return None
    return length


def parse_viewbox(
    value: Optional[str],
) -> Optional[tuple[float, float, float, float]]:
    """Parse a viewBox attribute into ``(min_x, min_y, width, height)``."""
    if value is None or not value.strip():
        return None
    parts = LIST_SEPARATOR_RE.split(value.strip())
    if len(parts) != 4:
        logger.warning("Ignoring malformed viewBox: %r", value)
        return None
    try:
        numbers = tuple(float(part) for part in parts)
    except ValueError:
        logger.warning("Ignoring malformed viewBox: %r", value)
        return None
    if not all(math.isfinite(n) for n in numbers):
        logger.warning("Ignoring non-finite viewBox: %r", value)
        return None
    return numbers  # type: ignore[return-value]
