"""
Validation of post mutations before they reach persistence.

Rules run in a fixed order and the first failing rule wins: exactly one
``ValidationError`` is raised per call, carrying an ``ErrorCode``. The
validator only reads through its collaborators, so a rejected payload
leaves no trace.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from app.configs.settings import (
    MAX_AUTHOR_LENGTH,
    MAX_CONTENT_LENGTH,
    MAX_EXCERPT_LENGTH,
    MAX_TAG_LENGTH,
    MAX_TAGS_COUNT,
    MAX_TITLE_LENGTH,
)
from app.errors.validation import ErrorCode, ValidationError
from app.models.category import CategoryDB
from app.models.post import PostStatus
from app.schemas.post import PostCreate, PostUpdate
from app.utils.sanitizer import sanitize_text
from app.utils.slug import normalize_slug, slug_from_title, validate_slug

REQUIRED_FIELDS = ("title", "content", "author")
UPDATABLE_FIELDS = ("title", "content", "status", "excerpt", "tags", "category_ids")


class SlugLookup(Protocol):
    async def slug_exists(self, slug: str) -> bool: ...


class CategoryLookup(Protocol):
    async def get_by_ids(self, ids: Sequence[int]) -> Sequence[CategoryDB]: ...


@dataclass(frozen=True, slots=True)
class PostDraft:
    """A sanitized post ready to be inserted."""

    title: str
    content: str
    author: str
    slug: str
    status: PostStatus = PostStatus.DRAFT
    excerpt: str | None = None
    tags: list[str] = field(default_factory=list)
    category_ids: list[int] = field(default_factory=list)

    def columns(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "slug": self.slug,
            "status": self.status.value,
            "excerpt": self.excerpt,
            "tags": list(self.tags),
        }


@dataclass(frozen=True, slots=True)
class PostChanges:
    """Sanitized column updates plus an optional category replacement."""

    values: dict[str, Any] = field(default_factory=dict)
    category_ids: list[int] | None = None


def _parse_status(value: str | None) -> PostStatus:
    if value is None:
        return PostStatus.DRAFT
    try:
        return PostStatus(value)
    except ValueError:
        allowed = ", ".join(status.value for status in PostStatus)
        raise ValidationError(
            "Invalid status",
            code=ErrorCode.INVALID_STATUS,
            details=f"Status must be one of: {allowed}",
        ) from None


def _required_text(name: str, value: str, max_length: int) -> str:
    cleaned = sanitize_text(value, max_length)
    if not cleaned:
        raise ValidationError(
            f"Field '{name}' is empty after sanitization",
            code=ErrorCode.EMPTY_FIELD,
        )
    return cleaned


def _optional_text(value: str | None, max_length: int) -> str | None:
    if value is None:
        return None
    return sanitize_text(value, max_length) or None


def _clean_tags(tags: Sequence[str] | None) -> list[str]:
    cleaned: list[str] = []
    for tag in tags or ():
        value = sanitize_text(tag, MAX_TAG_LENGTH)
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


def _check_tag_count(tags: Sequence[str]) -> None:
    if len(tags) > MAX_TAGS_COUNT:
        raise ValidationError(
            "Too many tags",
            code=ErrorCode.TOO_MANY_TAGS,
            details=f"A post can have at most {MAX_TAGS_COUNT} tags",
        )


class PostValidator:
    """
    Apply the post rules to create and update payloads.

    Args:
        posts: Read-only slug lookup (the post repository).
        categories: Read-only category lookup (the category repository).
    """

    def __init__(self, posts: SlugLookup, categories: CategoryLookup) -> None:
        self.posts = posts
        self.categories = categories

    async def validate_create(self, payload: PostCreate) -> PostDraft:
        missing = [name for name in REQUIRED_FIELDS if not getattr(payload, name)]
        if missing:
            raise ValidationError(
                "Missing required fields",
                code=ErrorCode.MISSING_FIELDS,
                details=f"Required: {', '.join(missing)}",
            )

        title = _required_text("title", payload.title or "", MAX_TITLE_LENGTH)
        content = _required_text("content", payload.content or "", MAX_CONTENT_LENGTH)
        author = _required_text("author", payload.author or "", MAX_AUTHOR_LENGTH)
        excerpt = _optional_text(payload.excerpt, MAX_EXCERPT_LENGTH)
        tags = _clean_tags(payload.tags)

        slug = self._resolve_slug(payload.slug, title)
        status = _parse_status(payload.status)

        if await self.posts.slug_exists(slug):
            raise ValidationError(
                "Slug already exists",
                code=ErrorCode.SLUG_EXISTS,
                details=f"A post with slug '{slug}' already exists",
            )

        category_ids = await self._check_categories(payload.category_ids)
        _check_tag_count(tags)

        return PostDraft(
            title=title,
            content=content,
            author=author,
            slug=slug,
            status=status,
            excerpt=excerpt,
            tags=tags,
            category_ids=category_ids,
        )

    async def validate_update(self, payload: PostUpdate) -> PostChanges:
        supplied = {
            name for name in payload.model_fields_set & set(UPDATABLE_FIELDS)
            if getattr(payload, name) is not None or name == "excerpt"
        }
        if not supplied:
            raise ValidationError(
                "No fields to update",
                code=ErrorCode.NO_UPDATE_FIELDS,
                details=f"Provide at least one of: {', '.join(UPDATABLE_FIELDS)}",
            )

        values: dict[str, Any] = {}
        if "title" in supplied:
            values["title"] = _required_text("title", payload.title or "", MAX_TITLE_LENGTH)
        if "content" in supplied:
            values["content"] = _required_text("content", payload.content or "", MAX_CONTENT_LENGTH)
        if "excerpt" in supplied:
            # An explicit null clears the excerpt
            values["excerpt"] = _optional_text(payload.excerpt, MAX_EXCERPT_LENGTH)
        if "tags" in supplied:
            values["tags"] = _clean_tags(payload.tags)
        if "status" in supplied:
            values["status"] = _parse_status(payload.status).value

        category_ids = None
        if "category_ids" in supplied:
            category_ids = await self._check_categories(payload.category_ids)
        if "tags" in values:
            _check_tag_count(values["tags"])

        return PostChanges(values=values, category_ids=category_ids)

    @staticmethod
    def _resolve_slug(supplied: str | None, title: str) -> str:
        if not supplied:
            return slug_from_title(title)

        slug = normalize_slug(supplied)
        if not validate_slug(slug):
            raise ValidationError(
                "Invalid slug format",
                code=ErrorCode.INVALID_SLUG,
                details="Slug must be 1-100 characters of lowercase letters, digits and hyphens",
            )
        return slug

    async def _check_categories(self, ids: Sequence[int] | None) -> list[int]:
        wanted = list(dict.fromkeys(ids or ()))
        if not wanted:
            return []

        found = {category.id for category in await self.categories.get_by_ids(wanted)}
        unknown = [category_id for category_id in wanted if category_id not in found]
        if unknown:
            raise ValidationError(
                "Unknown category",
                code=ErrorCode.UNKNOWN_CATEGORY,
                details=f"Category ids not found: {', '.join(map(str, unknown))}",
            )
        return wanted
