"""Error taxonomy for SVG conversion.

Every failure raised by the pipeline is a :class:`ConversionError` subclass.
The ``code`` attribute is a stable tag that identifies the failure kind in a
:class:`~svg2img.converter.ConversionResult`.
"""

from typing import Any, Iterable


class ConversionError(Exception):
    """Base class for all conversion failures."""

    code = "ConversionError"

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(ConversionError):
    """The request was rejected before any parsing or rendering work."""

    code = "ValidationError"


class MissingFormat(ValidationError):
    code = "MissingFormat"

    def __init__(self) -> None:
        super().__init__("format option is required")


class UnsupportedFormat(ValidationError):
    code = "UnsupportedFormat"

    def __init__(self, value: Any, supported: Iterable[str]) -> None:
        self.value = value
        self.supported = tuple(supported)
        super().__init__(
            f"unsupported format: {value!r}. "
            f"Supported formats: {', '.join(self.supported)}"
        )


class InvalidDimension(ValidationError):
    code = "InvalidDimension"

    def __init__(self, dimension: str, value: Any) -> None:
        self.dimension = dimension
        self.value = value
        super().__init__(f"{dimension} must be a positive integer, got: {value!r}")


class InvalidReplacements(ValidationError):
    code = "InvalidReplacements"


class ParseError(ConversionError):
    """The source text is not a well-formed SVG document."""

    code = "ParseError"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to parse SVG: {reason}")


class InvalidBackgroundColor(ConversionError):
    code = "InvalidBackgroundColor"

    def __init__(self, value: Any, reason: str) -> None:
        self.value = value
        super().__init__(f"Invalid hex color {value!r}: {reason}")


class RenderError(ConversionError):
    """Degenerate geometry or a document the engine cannot render."""

    code = "RenderError"


class EncodeError(ConversionError):
    """The pixel buffer cannot be serialized into the requested container."""

    code = "EncodeError"
