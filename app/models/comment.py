"""Comment database model using SQLModel."""

from datetime import datetime
from enum import StrEnum
from typing import cast

from sqlalchemy import DateTime, Index, Integer, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

from app.utils.helpers import utc_now


class CommentStatus(StrEnum):
    """Moderation state. Only approved comments are listed publicly."""

    PENDING = "pending"
    APPROVED = "approved"
    SPAM = "spam"


class CommentDB(SQLModel, table=True):
    """Reader comment on a post, optionally replying to another comment."""

    __tablename__ = cast("declared_attr[str]", "comments")

    __table_args__ = (Index("ix_comments_post_status_created", "post_id", "status", "created_at"),)

    id: int | None = Field(default=None, primary_key=True)
    post_id: int = Field(
        sa_column=Column(
            "post_id",
            Integer,
            ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    parent_id: int | None = Field(
        default=None,
        sa_column=Column(
            "parent_id",
            Integer,
            ForeignKey("comments.id", ondelete="CASCADE"),
        ),
    )
    author_name: str = Field(sa_column=Column(String(100), nullable=False))
    author_email: str = Field(sa_column=Column(String(254), nullable=False))
    content: str = Field(sa_column=Column(Text, nullable=False))
    status: str = Field(
        default=CommentStatus.PENDING.value,
        sa_column=Column(String(20), nullable=False),
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
