"""Post database model using SQLModel."""

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING, cast

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, Relationship, SQLModel, String

from app.models.category import PostCategoryLink
from app.utils.helpers import utc_now

if TYPE_CHECKING:
    from app.models.category import CategoryDB


class PostStatus(StrEnum):
    """Lifecycle states of a post."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class PostDB(SQLModel, table=True):
    """
    Post database model.

    ``published_at`` is written once, the first time the post enters the
    ``published`` state, and never cleared afterwards.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (Index("ix_posts_status_published", "status", "published_at"),)

    id: int | None = Field(default=None, primary_key=True, description="Post ID")

    title: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Post title",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post body",
    )
    author: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Author display name",
    )
    slug: str = Field(
        sa_column=Column(String(100), unique=True, nullable=False, index=True),
        description="URL-friendly slug (unique)",
    )
    status: str = Field(
        default=PostStatus.DRAFT.value,
        sa_column=Column(String(20), nullable=False, index=True),
        description="Post status (draft, published, archived)",
    )
    excerpt: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Short summary",
    )
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Free-form tags",
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )
    published_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="First publication timestamp",
    )

    categories: list["CategoryDB"] = Relationship(
        link_model=PostCategoryLink,
        sa_relationship_kwargs={"lazy": "selectin"},
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Hello World!",
                "slug": "hello-world",
                "content": "First post.",
                "author": "admin",
                "status": "published",
                "excerpt": None,
                "tags": ["intro"],
            },
        },
    )

    @property
    def category_names(self) -> list[str]:
        return sorted(category.name for category in self.categories)
