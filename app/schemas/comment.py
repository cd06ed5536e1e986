"""Comment request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Comment body. Field rules are enforced by ``CommentValidator``."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "authorName": "Reader",
                "authorEmail": "reader@example.com",
                "content": "Nice post!",
            },
        },
    )

    author_name: str | None = Field(default=None, alias="authorName")
    author_email: str | None = Field(default=None, alias="authorEmail")
    content: str | None = None
    parent_id: int | None = Field(default=None, alias="parentId")


class CommentResponse(BaseModel):
    """Public view of a comment. The author's email is never returned."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    post_id: int = Field(alias="postId")
    parent_id: int | None = Field(default=None, alias="parentId")
    author_name: str = Field(alias="authorName")
    content: str
    created_at: datetime = Field(alias="createdAt")


class CommentCreatedResponse(BaseModel):
    id: int
    message: str = "Comment submitted for moderation"
