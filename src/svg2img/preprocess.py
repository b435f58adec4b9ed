import logging
from typing import Iterable

logger = logging.getLogger(__name__)


def apply_replacements(text: str, replacements: Iterable[tuple[str, str]]) -> str:
    """Apply literal substring replacements to text, in order.

    Each pair replaces every occurrence in the result of the previous pair.
    Empty search strings are skipped.
    """
    for search, replace in replacements:
        if not search:
            logger.debug("Skipping replacement with empty search string")
            continue
        text = text.replace(search, replace)
    return text
