# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    CategoryRepoDep,
    CommentRepoDep,
    CommentValidatorDep,
    PostListQuery,
    PostListQueryDep,
    PostRepoDep,
    PostValidatorDep,
    enforce_rate_limit,
    get_authenticator,
    get_category_repository,
    get_comment_repository,
    get_post_repository,
    get_rate_limiter,
    require_api_key,
)

__all__ = [
    "CategoryRepoDep",
    "CommentRepoDep",
    "CommentValidatorDep",
    "PostListQuery",
    "PostListQueryDep",
    "PostRepoDep",
    "PostValidatorDep",
    "enforce_rate_limit",
    "get_authenticator",
    "get_category_repository",
    "get_comment_repository",
    "get_post_repository",
    "get_rate_limiter",
    "require_api_key",
]
