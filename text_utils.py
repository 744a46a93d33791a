import json
import logging
import re
from typing import List, Optional

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r'\r\n|\r|\n')


def _coerce_to_text(value):
    """
    Ensure we return a string: if value is a dict with common keys, return the text field.
    Otherwise JSON-dump or str() it.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode('utf-8', errors='replace')
    if isinstance(value, dict):
        for k in ('text', 'ocr_text', 'raw_text', 'content'):
            if k in value and value[k] is not None:
                return str(value[k])
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def split_lines(text) -> List[str]:
    """
    Split recognized text into trimmed, non-empty lines, preserving order.

    Empty or missing input yields an empty list.
    """
    text = _coerce_to_text(text)
    if not text:
        return []
    lines = [line.strip() for line in _LINE_BREAK_RE.split(text)]
    return [line for line in lines if line]


def normalize_decimal(token: str) -> str:
    """Use '.' as decimal separator: '25,40' -> '25.40'."""
    return str(token).strip().replace(',', '.')


def parse_decimal(token) -> Optional[float]:
    """Parse a numeric token with either decimal separator; None if malformed."""
    if token is None:
        return None
    try:
        return float(normalize_decimal(token))
    except ValueError:
        logger.debug(f"Skipping malformed numeric token: {token!r}")
        return None
