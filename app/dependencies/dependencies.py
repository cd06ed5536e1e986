# app/dependencies/dependencies.py

"""Request-scoped dependencies: repositories, validators, rate limit and API key checks."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import settings
from app.configs.settings import DEFAULT_PAGE_SIZE, MAX_PAGE, MAX_PAGE_SIZE
from app.db import get_session
from app.errors import InvalidCredentialError, MissingCredentialError, RateLimitError
from app.managers.rate_limiter import FixedWindowRateLimiter, get_identifier
from app.models.post import PostStatus
from app.repositories import CategoryRepository, CommentRepository, PostRepository
from app.services.auth import ApiKeyAuthenticator, AuthStatus
from app.services.comment_validator import CommentValidator
from app.services.post_validator import PostValidator

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_post_repository(session: SessionDep) -> PostRepository:
    return PostRepository(session)


def get_category_repository(session: SessionDep) -> CategoryRepository:
    return CategoryRepository(session)


def get_comment_repository(session: SessionDep) -> CommentRepository:
    return CommentRepository(session)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
CategoryRepoDep = Annotated[CategoryRepository, Depends(get_category_repository)]
CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repository)]


def get_post_validator(posts: PostRepoDep, categories: CategoryRepoDep) -> PostValidator:
    return PostValidator(posts, categories)


def get_comment_validator(comments: CommentRepoDep) -> CommentValidator:
    return CommentValidator(comments)


PostValidatorDep = Annotated[PostValidator, Depends(get_post_validator)]
CommentValidatorDep = Annotated[CommentValidator, Depends(get_comment_validator)]


@dataclass(frozen=True)
class PostListQuery:
    """
    Query container for post listing and filters.

    Parameters
    ----------
    page : int
        1-based page number.
    limit : int
        Page size.
    status : PostStatus | None
        Optional status filter.
    category : str | None
        Optional category name filter.
    """

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    status: PostStatus | None = None
    category: str | None = None


def get_post_list_query(
    page: Annotated[int, Query(ge=1, le=MAX_PAGE, description="Page number")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_SIZE, description="Posts per page"),
    ] = DEFAULT_PAGE_SIZE,
    status: Annotated[PostStatus | None, Query(description="Optional status filter")] = None,
    category: Annotated[
        str | None,
        Query(max_length=100, description="Optional category slug filter"),
    ] = None,
) -> PostListQuery:
    """Dependency to construct `PostListQuery` from query parameters."""
    return PostListQuery(page=page, limit=limit, status=status, category=category)


PostListQueryDep = Annotated[PostListQuery, Depends(get_post_list_query)]


def get_rate_limiter(request: Request) -> FixedWindowRateLimiter:
    return request.app.state.rate_limiter


def get_authenticator(request: Request) -> ApiKeyAuthenticator:
    return request.app.state.authenticator


async def enforce_rate_limit(
    request: Request,
    limiter: Annotated[FixedWindowRateLimiter, Depends(get_rate_limiter)],
) -> None:
    """
    Count the request against the caller's window.

    Raises
    ------
    RateLimitError
        When the caller has used up the current window.
    """
    identity = get_identifier(request, settings.CLIENT_IP_HEADER)
    decision = limiter.check(identity)
    if not decision.allowed:
        raise RateLimitError(retry_after=decision.retry_after)


async def require_api_key(
    authenticator: Annotated[ApiKeyAuthenticator, Depends(get_authenticator)],
    api_key: Annotated[str | None, Header(alias="X-API-Key")] = None,
) -> None:
    """
    Guard write endpoints with the shared API key.

    Raises
    ------
    MissingCredentialError
        No ``X-API-Key`` header was sent (401).
    InvalidCredentialError
        The header does not match the configured secret (403).
    """
    result = authenticator.authenticate(api_key)
    if result.status is AuthStatus.MISSING:
        raise MissingCredentialError
    if result.status is AuthStatus.MISMATCH:
        raise InvalidCredentialError
