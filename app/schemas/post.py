"""
Post request and response schemas.

Request bodies are loose: every field is optional and typed
only as far as JSON decoding goes. Presence, sanitization, slug and status
rules are applied afterwards by ``PostValidator`` so that each failure can
carry its own error code.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PostCreate(BaseModel):
    """Post creation body."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Hello World!",
                "content": "First post on the new blog.",
                "author": "admin",
                "status": "published",
                "excerpt": "A first post",
                "tags": ["intro"],
                "categoryIds": [1],
            },
        },
    )

    title: str | None = None
    content: str | None = None
    author: str | None = None
    slug: str | None = None
    status: str | None = None
    excerpt: str | None = None
    tags: list[str] | None = None
    category_ids: list[int] | None = Field(default=None, alias="categoryIds")


class PostUpdate(BaseModel):
    """Partial post update body. Slug and author cannot be changed."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"status": "published"},
        },
    )

    title: str | None = None
    content: str | None = None
    status: str | None = None
    excerpt: str | None = None
    tags: list[str] | None = None
    category_ids: list[int] | None = Field(default=None, alias="categoryIds")


class PostResponse(BaseModel):
    """Full post as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    title: str
    slug: str
    content: str
    author: str
    status: str
    excerpt: str | None = None
    tags: list[str] = []
    categories: list[str] = []
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    published_at: datetime | None = Field(default=None, alias="publishedAt")

    @model_validator(mode="before")
    @classmethod
    def flatten_categories(cls, data: Any) -> Any:
        """Expose category names instead of category rows."""
        if hasattr(data, "category_names"):
            return {
                "id": data.id,
                "title": data.title,
                "slug": data.slug,
                "content": data.content,
                "author": data.author,
                "status": data.status,
                "excerpt": data.excerpt,
                "tags": list(data.tags or []),
                "categories": data.category_names,
                "created_at": data.created_at,
                "updated_at": data.updated_at,
                "published_at": data.published_at,
            }
        return data


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")


class PostListResponse(BaseModel):
    posts: list[PostResponse]
    pagination: Pagination


class PostCreatedResponse(BaseModel):
    id: int
    slug: str
    message: str = "Post created successfully"


class PostUpdatedResponse(BaseModel):
    message: str = "Post updated successfully"
    post: PostResponse


class PostDeletedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Post deleted successfully"
    deleted_id: int = Field(alias="deletedId")
