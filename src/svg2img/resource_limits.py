"""Resource limits for DoS prevention.

This module provides configurable resource limits to prevent denial-of-service
attacks from malicious or malformed input documents.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# WebP hard limit for image dimensions (16383 pixels)
WEBP_MAX_DIMENSION = 16383

DEFAULT_MAX_SOURCE_SIZE = 64 * 1024 * 1024
DEFAULT_MAX_DEPTH = 100
# Largest side any supported container can store (PNG, JPEG and GIF headers)
DEFAULT_MAX_IMAGE_DIMENSION = 65535


@dataclass(frozen=True)
class ResourceLimits:
    """Resource limits for SVG conversion operations.

    These limits help prevent denial-of-service attacks by constraining:
    - Source markup size (prevents memory exhaustion while parsing)
    - Element nesting depth (prevents stack exhaustion while serializing)
    - Output canvas dimensions (prevents memory exhaustion while rendering)

    Limits can be configured via environment variables or constructor parameters.
    Constructor parameters take precedence over environment variables.

    Environment variables:
        SVG2IMG_MAX_SOURCE_SIZE: Maximum markup size in bytes
            (default: 67108864 = 64MB)
        SVG2IMG_MAX_DEPTH: Maximum element nesting depth (default: 100)
        SVG2IMG_MAX_IMAGE_DIMENSION: Maximum canvas side in pixels
            (default: 65535)

    Example:
        >>> # Use default limits
        >>> limits = ResourceLimits.default()
        >>>
        >>> # Customize limits
        >>> limits = ResourceLimits(
        ...     max_source_size=1024 * 1024,  # 1MB
        ...     max_depth=50,
        ...     max_image_dimension=4096,
        ... )
        >>>
        >>> # Disable specific limits (set to 0)
        >>> limits = ResourceLimits(max_image_dimension=0)
    """

    max_source_size: int = DEFAULT_MAX_SOURCE_SIZE
    max_depth: int = DEFAULT_MAX_DEPTH
    max_image_dimension: int = DEFAULT_MAX_IMAGE_DIMENSION

    @classmethod
    def default(cls) -> "ResourceLimits":
        """Create ResourceLimits with default values from environment variables.

        Returns:
            ResourceLimits instance with values from environment variables,
            falling back to hardcoded defaults if not set.

        Raises:
            ValueError: If environment variable contains invalid integer value.

        Note:
            Negative values are treated as 0 (disabled limit) with a warning logged.
        """

        def parse_env_int(key: str, default: int) -> int:
            value_str = os.environ.get(key)
            if value_str is None:
                return default

            try:
                value = int(value_str)
            except ValueError as e:
                raise ValueError(
                    f"Environment variable {key}={value_str!r} is not a valid integer"
                ) from e

            # Treat negative values as 0 (disabled limit)
            if value < 0:
                logger.warning(
                    f"Environment variable {key}={value} is negative, "
                    f"treating as 0 (disabled limit). "
                    f"Consider using ResourceLimits.unlimited() instead."
                )
                return 0

            return value

        return cls(
            max_source_size=parse_env_int(
                "SVG2IMG_MAX_SOURCE_SIZE", DEFAULT_MAX_SOURCE_SIZE
            ),
            max_depth=parse_env_int("SVG2IMG_MAX_DEPTH", DEFAULT_MAX_DEPTH),
            max_image_dimension=parse_env_int(
                "SVG2IMG_MAX_IMAGE_DIMENSION", DEFAULT_MAX_IMAGE_DIMENSION
            ),
        )

    @classmethod
    def unlimited(cls) -> "ResourceLimits":
        """Create ResourceLimits with all limits disabled.

        Warning:
            Only use this for trusted input in controlled environments.
        """
        return cls(max_source_size=0, max_depth=0, max_image_dimension=0)

    def is_source_size_limited(self) -> bool:
        """Check if source size limit is enabled."""
        return self.max_source_size > 0

    def is_depth_limited(self) -> bool:
        """Check if nesting depth limit is enabled."""
        return self.max_depth > 0

    def is_image_dimension_limited(self) -> bool:
        """Check if image dimension limit is enabled."""
        return self.max_image_dimension > 0
