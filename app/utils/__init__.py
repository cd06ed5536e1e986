"""Utility helper functions."""

from app.utils.helpers import host, today_str, total_pages, utc_now
from app.utils.sanitizer import sanitize_text
from app.utils.slug import normalize_slug, slug_from_title, validate_slug

__all__ = [
    "host",
    "normalize_slug",
    "sanitize_text",
    "slug_from_title",
    "today_str",
    "total_pages",
    "utc_now",
    "validate_slug",
]
