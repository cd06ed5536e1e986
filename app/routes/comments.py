# app/routes/comments.py

"""
Comment Routes.

Comments are public to read and to submit. New comments start in the
``pending`` state and only ``approved`` ones are listed.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.dependencies import CommentRepoDep, CommentValidatorDep, PostRepoDep, enforce_rate_limit
from app.errors import RecordNotFoundError
from app.monitoring.logging import get_logger
from app.schemas.comment import CommentCreate, CommentCreatedResponse, CommentResponse

router = APIRouter(
    prefix="/api/posts/{post_id}/comments",
    tags=["💬 Comments"],
    dependencies=[Depends(enforce_rate_limit)],
)

logger = get_logger(__name__)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[CommentResponse],
    summary="List approved comments on a post",
    operation_id="comments_list",
)
async def list_comments(
    post_id: int,
    posts: PostRepoDep,
    comments: CommentRepoDep,
) -> list[CommentResponse]:
    if not await posts.exists(post_id):
        raise RecordNotFoundError("Post not found")

    return [CommentResponse.model_validate(comment) for comment in await comments.list_approved(post_id)]


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=CommentCreatedResponse,
    status_code=HTTP_201_CREATED,
    summary="Submit a comment",
    operation_id="comments_create",
)
async def create_comment(
    post_id: int,
    payload: Annotated[CommentCreate, Body()],
    posts: PostRepoDep,
    comments: CommentRepoDep,
    validator: CommentValidatorDep,
) -> CommentCreatedResponse:
    if not await posts.exists(post_id):
        raise RecordNotFoundError("Post not found")

    draft = await validator.validate(post_id, payload)
    comment = await comments.create(draft)
    logger.info("Comment submitted", post_id=post_id, comment_id=comment.id)
    return CommentCreatedResponse(id=comment.id)
