# app/routes/posts.py

"""
Post Routes.

Summary
-------
Endpoints include:
  - List posts (paginated, filterable by status and category)
  - Get post by id
  - Create post
  - Update post
  - Delete post

Every endpoint counts against the caller's rate limit window. Write
endpoints additionally require the ``X-API-Key`` header; the rate limit is
checked first.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.dependencies import (
    PostListQueryDep,
    PostRepoDep,
    PostValidatorDep,
    enforce_rate_limit,
    require_api_key,
)
from app.errors import RecordNotFoundError
from app.monitoring.logging import get_logger
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
from app.utils.helpers import total_pages

router = APIRouter(
    prefix="/api/posts",
    tags=["📝 Posts"],
    dependencies=[Depends(enforce_rate_limit)],
)

logger = get_logger(__name__)

ERROR_RESPONSES: dict[int | str, dict] = {
    400: {
        "description": "Validation error",
        "content": {
            "application/json": {
                "example": {"error": "Invalid slug format", "code": "invalid_slug"},
            },
        },
    },
    429: {
        "description": "Rate limit exceeded",
        "content": {
            "application/json": {"example": {"error": "Rate limit exceeded", "retryAfter": 42}},
        },
    },
}

WRITE_RESPONSES: dict[int | str, dict] = {
    **ERROR_RESPONSES,
    401: {
        "description": "Missing API key",
        "content": {"application/json": {"example": {"error": "API key required"}}},
    },
    403: {
        "description": "Invalid API key",
        "content": {"application/json": {"example": {"error": "Invalid API key"}}},
    },
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=PostListResponse,
    summary="List posts",
    responses=ERROR_RESPONSES,
    operation_id="posts_list",
)
async def list_posts(query: PostListQueryDep, repo: PostRepoDep) -> PostListResponse:
    """
    List posts, most recently published first.

    Parameters
    ----------
    query : PostListQuery
        Page, page size and optional status/category filters.
    repo : PostRepository
        Post repository.
    """
    posts, total = await repo.list_posts(
        page=query.page,
        limit=query.limit,
        status=query.status,
        category=query.category,
    )
    return PostListResponse(
        posts=[PostResponse.model_validate(post) for post in posts],
        pagination=Pagination(
            page=query.page,
            limit=query.limit,
            total=total,
            total_pages=total_pages(total, query.limit),
        ),
    )


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Get a post by id",
    responses={
        **ERROR_RESPONSES,
        404: {"content": {"application/json": {"example": {"error": "Post not found"}}}},
    },
    operation_id="posts_get",
)
async def get_post(post_id: int, repo: PostRepoDep) -> PostResponse:
    post = await repo.get_or_raise(post_id)
    return PostResponse.model_validate(post)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostCreatedResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a post",
    description="Create a post. The slug is derived from the title when not supplied.",
    responses=WRITE_RESPONSES,
    dependencies=[Depends(require_api_key)],
    operation_id="posts_create",
)
async def create_post(
    payload: Annotated[PostCreate, Body()],
    validator: PostValidatorDep,
    repo: PostRepoDep,
) -> PostCreatedResponse:
    draft = await validator.validate_create(payload)
    post = await repo.create(draft)
    logger.info("Post created", post_id=post.id, slug=post.slug, status=post.status)
    return PostCreatedResponse(id=post.id, slug=post.slug)


@router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostUpdatedResponse,
    summary="Update a post",
    description="Partial update. At least one of title, content, status, excerpt, tags "
    "or categoryIds must be supplied.",
    responses=WRITE_RESPONSES,
    dependencies=[Depends(require_api_key)],
    operation_id="posts_update",
)
async def update_post(
    post_id: int,
    payload: Annotated[PostUpdate, Body()],
    validator: PostValidatorDep,
    repo: PostRepoDep,
) -> PostUpdatedResponse:
    if not await repo.exists(post_id):
        raise RecordNotFoundError("Post not found")

    changes = await validator.validate_update(payload)
    post = await repo.update(post_id, changes)
    logger.info("Post updated", post_id=post.id, fields=sorted(changes.values))
    return PostUpdatedResponse(post=PostResponse.model_validate(post))


@router.delete(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostDeletedResponse,
    summary="Delete a post",
    responses=WRITE_RESPONSES,
    dependencies=[Depends(require_api_key)],
    operation_id="posts_delete",
)
async def delete_post(post_id: int, repo: PostRepoDep) -> PostDeletedResponse:
    if not await repo.delete(post_id):
        raise RecordNotFoundError("Post not found")

    logger.info("Post deleted", post_id=post_id)
    return PostDeletedResponse(deleted_id=post_id)
