from collections.abc import Awaitable, Callable
from typing import Any
from uuid import uuid4

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from structlog.stdlib import BoundLogger

from app.configs.settings import DEFAULT_ERROR_MESSAGE
from app.monitoring.logging import get_request_id
from app.utils.helpers import host


class BaseAppError(Exception):
    """
    Base exception class for application errors.

    ``expose`` decides whether ``detail`` may reach the caller. Errors that
    are not exposed are answered with an opaque message and a request id.
    """

    expose: bool = True

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
        details: str | None = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
        self.details = details

    def __str__(self) -> str:
        return self.detail

    @property
    def headers(self) -> dict[str, str] | None:
        """Extra response headers."""
        return None

    def to_content(self) -> dict[str, Any]:
        """Response body for this error."""
        content: dict[str, Any] = {"error": self.detail}
        if self.details:
            content["details"] = self.details
        return content


def request_id_for(request: Request) -> str:
    """Return the correlation id of ``request``, minting one if needed."""
    request_id = getattr(request.state, "request_id", None) or get_request_id()
    return request_id or uuid4().hex[:16]


def internal_error_response(request: Request) -> ORJSONResponse:
    """Opaque 500 body: a fixed message plus the correlation id."""
    return ORJSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": DEFAULT_ERROR_MESSAGE, "requestId": request_id_for(request)},
    )


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        if not isinstance(exc, BaseAppError) or not exc.expose:
            logger.error(
                "Internal error",
                error=str(exc),
                error_type=type(exc).__name__,
                ip=host(request),
                path=request.url.path,
                request_id=request_id_for(request),
                exc_info=exc,
            )
            return internal_error_response(request)

        logger.warning(
            f"{exc.detail} for ip: {host(request)} for endpoint {request.url.path}",
            status_code=exc.status_code,
        )
        return ORJSONResponse(
            content=exc.to_content(),
            status_code=exc.status_code,
            headers=exc.headers,
        )

    return handler


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> ORJSONResponse:
    """Render routing errors (unknown path, wrong method) in the app's error shape."""
    error = BaseAppError(str(exc.detail), exc.status_code)
    return ORJSONResponse(
        content=error.to_content(),
        status_code=exc.status_code,
        headers=exc.headers,
    )
