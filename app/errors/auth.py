"""Authentication errors."""

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring.logging import get_logger

logger = get_logger(__name__)


class ApiKeyAuthenticationError(BaseAppError):
    """Base class for API key authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
        details: str | None = None,
    ) -> None:
        super().__init__(detail, status_code, details)


class MissingCredentialError(ApiKeyAuthenticationError):
    """Raised when a write request carries no API key."""

    def __init__(self) -> None:
        super().__init__(
            "API key required",
            HTTP_401_UNAUTHORIZED,
            details="Please provide X-API-Key header for write operations",
        )


class InvalidCredentialError(ApiKeyAuthenticationError):
    """Raised when the presented API key does not match."""

    def __init__(self) -> None:
        super().__init__("Invalid API key", HTTP_403_FORBIDDEN)


auth_exception_handler = create_exception_handler(logger)
