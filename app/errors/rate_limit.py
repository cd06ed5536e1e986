"""Rate limiting errors."""

from typing import Any

from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring.logging import get_logger

logger = get_logger(__name__)


class RateLimitError(BaseAppError):
    """Raised when a client identity exhausted its window."""

    def __init__(self, retry_after: int, detail: str = "Rate limit exceeded") -> None:
        super().__init__(detail, HTTP_429_TOO_MANY_REQUESTS)
        self.retry_after = retry_after

    @property
    def headers(self) -> dict[str, str]:
        return {"Retry-After": str(self.retry_after)}

    def to_content(self) -> dict[str, Any]:
        return {**super().to_content(), "retryAfter": self.retry_after}


rate_limit_exception_handler = create_exception_handler(logger)
