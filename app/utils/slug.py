"""
Slug normalization and validation.

Two entry points produce slugs:

- ``normalize_slug`` for slugs supplied by API callers. The result is checked
  with ``validate_slug`` and rejected, never repaired, when it fails.
- ``slug_from_title`` for slugs derived from a post title. Its output always
  satisfies ``validate_slug``.
"""

from hashlib import sha1
from re import Match
from re import compile as re_compile
from unicodedata import combining, normalize

from app.configs.settings import MAX_SLUG_LENGTH

SLUG_PATTERN = re_compile(rf"[a-z0-9-]{{1,{MAX_SLUG_LENGTH}}}")

_NON_SLUG_RUN = re_compile(r"[^a-z0-9]+")
_CJK_RUN = re_compile(r"[\u4e00-\u9fa5]+")
_NON_TITLE_RUN = re_compile(r"[^a-z0-9\u4e00-\u9fa5]+")

FALLBACK_PREFIX = "post-"


def validate_slug(slug: str) -> bool:
    """Return True when ``slug`` is 1-100 chars of ``[a-z0-9-]``."""
    return isinstance(slug, str) and SLUG_PATTERN.fullmatch(slug) is not None


def normalize_slug(text: str) -> str:
    """
    Normalize a caller-supplied slug.

    Lower-cases the text, collapses every run of characters outside
    ``[a-z0-9]`` into one hyphen and strips leading/trailing hyphens.

    Examples
    --------
    >>> normalize_slug("  My First_Post!! ")
    'my-first-post'
    """
    return _NON_SLUG_RUN.sub("-", text.lower()).strip("-")


def _fold_accents(text: str) -> str:
    decomposed = normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not combining(ch))


def _encode_cjk(match: Match[str]) -> str:
    code_points = "-".join(f"{ord(ch):x}" for ch in match.group(0))
    return f"-{code_points}-"


def _truncate(slug: str) -> str:
    if len(slug) <= MAX_SLUG_LENGTH:
        return slug
    cut = slug[:MAX_SLUG_LENGTH]
    if slug[MAX_SLUG_LENGTH] != "-":
        # Prefer ending on a whole word
        head, sep, _ = cut.rpartition("-")
        if sep and head:
            cut = head
    return cut.strip("-")


def slug_from_title(title: str) -> str:
    """
    Derive a slug from a post title.

    Accented Latin letters are folded to ASCII. CJK ideographs count as word
    content: each one is written as its hexadecimal code point, so titles in
    Chinese still yield a stable, URL-safe slug. Titles with no usable
    characters fall back to ``post-<sha1 prefix>``.

    Examples
    --------
    >>> slug_from_title("Hello World!")
    'hello-world'
    >>> slug_from_title("Café Déjà Vu")
    'cafe-deja-vu'
    >>> slug_from_title("你好 World")
    '4f60-597d-world'
    """
    text = _fold_accents(title.lower())
    text = _NON_TITLE_RUN.sub("-", text)
    text = _CJK_RUN.sub(_encode_cjk, text)
    slug = _truncate(_NON_SLUG_RUN.sub("-", text).strip("-"))

    if not slug:
        digest = sha1(title.encode("utf-8"), usedforsecurity=False).hexdigest()[:12]
        slug = f"{FALLBACK_PREFIX}{digest}"

    return slug
