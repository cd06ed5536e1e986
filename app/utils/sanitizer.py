"""
Best-effort markup stripping for free-text fields.

This is a defense-in-depth filter, not an HTML sanitizer. It works on the raw
string with regular expressions and does not build a document tree, so it
cannot promise to remove every injection vector: unterminated tags
(``<img src=x onerror=alert(1)``) and entity-encoded markup
(``&lt;script&gt;``) survive, and the body of a ``<script>`` with no closing
tag is kept as plain text. Output must still be escaped by whatever renders
it.
"""

from re import IGNORECASE
from re import compile as re_compile
from typing import Any

DEFAULT_MAX_LENGTH = 10000

# Whole <script ...>...</script> blocks, shortest match
SCRIPT_BLOCK = re_compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", IGNORECASE)
TAG = re_compile(r"<[^>]*>")


def sanitize_text(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> Any:
    """
    Strip script blocks and tags, truncate, then trim whitespace.

    Non-string values are returned unchanged.

    Examples
    --------
    >>> sanitize_text("<script>alert(1)</script>hello", 100)
    'hello'
    >>> sanitize_text("<b>bold</b> move", 100)
    'bold move'
    """
    if not isinstance(value, str):
        return value

    cleaned = SCRIPT_BLOCK.sub("", value)
    cleaned = TAG.sub("", cleaned)
    return cleaned[:max_length].strip()
