"""
Drawing number recognition.
"""
import re
import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

# Tried in order on each line; the first line with any match wins.
DRAWING_NUMBER_PATTERNS = [
    # dotted code, e.g. 12.34.56-7890
    re.compile(r'(?<![\w.])\d{2}\.\d{2}\.\d{2}-\d{4}(?!\d)'),
    # bare 6-9 digit run with an optional letter prefix, e.g. A1234567
    re.compile(r'(?<![\w.,\-])[A-Za-z]?\d{6,9}(?![\w]|[.,]\d)'),
]


def resolve_drawing_number(lines: Iterable[str]) -> Optional[str]:
    """Return the first drawing number found, or None."""
    for line in lines:
        for pattern in DRAWING_NUMBER_PATTERNS:
            m = pattern.search(line)
            if m:
                logger.info(f"Drawing number found: {m.group(0)}")
                return m.group(0)

    logger.warning("No drawing number found")
    return None
