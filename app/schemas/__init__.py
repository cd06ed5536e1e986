from app.schemas.category import CategoryResponse
from app.schemas.comment import CommentCreate, CommentCreatedResponse, CommentResponse
from app.schemas.health import HealthResponse
from app.schemas.post import (
    Pagination,
    PostCreate,
    PostCreatedResponse,
    PostDeletedResponse,
    PostListResponse,
    PostResponse,
    PostUpdate,
    PostUpdatedResponse,
)

__all__ = [
    "CategoryResponse",
    "CommentCreate",
    "CommentCreatedResponse",
    "CommentResponse",
    "HealthResponse",
    "Pagination",
    "PostCreate",
    "PostCreatedResponse",
    "PostDeletedResponse",
    "PostListResponse",
    "PostResponse",
    "PostUpdate",
    "PostUpdatedResponse",
]
