"""Database models for the application."""

from app.models.category import CategoryDB, PostCategoryLink
from app.models.comment import CommentDB, CommentStatus
from app.models.post import PostDB, PostStatus

__all__ = [
    "CategoryDB",
    "CommentDB",
    "CommentStatus",
    "PostCategoryLink",
    "PostDB",
    "PostStatus",
]
