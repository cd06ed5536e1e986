from app.services.auth import (
    ApiKeyAuthenticator,
    AuthConfig,
    AuthResult,
    AuthStatus,
    authenticate,
)
from app.services.comment_validator import CommentDraft, CommentValidator
from app.services.post_validator import PostChanges, PostDraft, PostValidator

__all__ = [
    "ApiKeyAuthenticator",
    "AuthConfig",
    "AuthResult",
    "AuthStatus",
    "CommentDraft",
    "CommentValidator",
    "PostChanges",
    "PostDraft",
    "PostValidator",
    "authenticate",
]
