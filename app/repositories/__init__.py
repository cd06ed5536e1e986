"""Repository layer for database operations."""

from app.repositories.category import CategoryRepository
from app.repositories.comment import CommentRepository
from app.repositories.post import PostRepository

__all__ = ["CategoryRepository", "CommentRepository", "PostRepository"]
