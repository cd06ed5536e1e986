"""Validation of reader comments."""

from dataclasses import dataclass
from re import compile as re_compile
from typing import Protocol

from app.configs.settings import (
    MAX_COMMENT_AUTHOR_LENGTH,
    MAX_COMMENT_CONTENT_LENGTH,
    MAX_COMMENT_EMAIL_LENGTH,
)
from app.errors.validation import ErrorCode, ValidationError
from app.models.comment import CommentDB
from app.schemas.comment import CommentCreate
from app.utils.sanitizer import sanitize_text

EMAIL_PATTERN = re_compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

REQUIRED_FIELDS = ("author_name", "author_email", "content")


class CommentLookup(Protocol):
    async def get_by_id(self, comment_id: int) -> CommentDB | None: ...


@dataclass(frozen=True, slots=True)
class CommentDraft:
    post_id: int
    author_name: str
    author_email: str
    content: str
    parent_id: int | None = None


class CommentValidator:
    """Checks comment payloads; replies must target a comment on the same post."""

    def __init__(self, comments: CommentLookup) -> None:
        self.comments = comments

    async def validate(self, post_id: int, payload: CommentCreate) -> CommentDraft:
        missing = [name for name in REQUIRED_FIELDS if not getattr(payload, name)]
        if missing:
            raise ValidationError(
                "Missing required fields",
                code=ErrorCode.MISSING_FIELDS,
                details=f"Required: {', '.join(missing)}",
            )

        author_name = sanitize_text(payload.author_name, MAX_COMMENT_AUTHOR_LENGTH)
        author_email = sanitize_text(payload.author_email, MAX_COMMENT_EMAIL_LENGTH)
        content = sanitize_text(payload.content, MAX_COMMENT_CONTENT_LENGTH)

        for name, value in (("author_name", author_name), ("content", content)):
            if not value:
                raise ValidationError(
                    f"Field '{name}' is empty after sanitization",
                    code=ErrorCode.EMPTY_FIELD,
                )

        if not EMAIL_PATTERN.fullmatch(author_email):
            raise ValidationError("Invalid email address", code=ErrorCode.INVALID_EMAIL)

        if payload.parent_id is not None:
            parent = await self.comments.get_by_id(payload.parent_id)
            if parent is None or parent.post_id != post_id:
                raise ValidationError(
                    "Invalid parent comment",
                    code=ErrorCode.INVALID_PARENT,
                    details="Replies must target a comment on the same post",
                )

        return CommentDraft(
            post_id=post_id,
            author_name=author_name,
            author_email=author_email,
            content=content,
            parent_id=payload.parent_id,
        )
