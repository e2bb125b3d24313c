"""Masking of Bring API secrets in log output."""

from typing import Optional

# Number of characters left visible at each end of a masked key
VISIBLE_CHARS = 4


def mask_key(key: Optional[str]) -> str:
    """Hide most of a Bring API key so it can appear in debug logs.

    Short keys are hidden entirely; longer keys keep a few characters at
    each end so the key in use can still be told apart from others.

    >>> mask_key("0123456789abcdef")
    '0123...cdef'
    """
    if not key:
        return "<empty>"
    if len(key) <= 2 * VISIBLE_CHARS:
        return "***"
    return f"{key[:VISIBLE_CHARS]}...{key[-VISIBLE_CHARS:]}"
