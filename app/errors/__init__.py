from app.errors.auth import (
    ApiKeyAuthenticationError,
    InvalidCredentialError,
    MissingCredentialError,
    auth_exception_handler,
)
from app.errors.base import (
    BaseAppError,
    create_exception_handler,
    http_exception_handler,
    internal_error_response,
    request_id_for,
)
from app.errors.database import (
    DatabaseError,
    DatabaseTimeoutError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
)
from app.errors.rate_limit import RateLimitError, rate_limit_exception_handler
from app.errors.validation import (
    ErrorCode,
    ValidationError,
    request_validation_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "ApiKeyAuthenticationError",
    "BaseAppError",
    "DatabaseError",
    "DatabaseTimeoutError",
    "DuplicateEntryError",
    "ErrorCode",
    "InvalidCredentialError",
    "MissingCredentialError",
    "RateLimitError",
    "RecordNotFoundError",
    "ValidationError",
    "auth_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "http_exception_handler",
    "internal_error_response",
    "rate_limit_exception_handler",
    "request_id_for",
    "request_validation_exception_handler",
    "validation_exception_handler",
]
