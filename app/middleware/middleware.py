# app/middleware/middleware.py
"""
Middleware components for the blog API.

This module contains middleware for request correlation, request logging,
security headers and CORS handling, plus the lifespan event handler that
prepares and releases the database.
"""

from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.status import HTTP_204_NO_CONTENT
from starlette.types import ASGIApp

from app.configs import settings
from app.db import close_db, init_db
from app.errors.base import create_exception_handler
from app.monitoring.logging import bind_request_id, clear_context, get_logger
from app.utils.helpers import host

logger = get_logger(__name__)
unhandled_error_handler = create_exception_handler(logger)

REQUEST_ID_HEADER = "X-Request-ID"
CORS_ALLOW_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
CORS_ALLOW_HEADERS = ("Content-Type", "X-API-Key")
CORS_MAX_AGE = 86400


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown events."""
    logger.info(f"Starting {app.title} {app.version}...")

    try:
        await init_db()
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info(f"Shutting down {app.title}...")
    await close_db()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Give every request a correlation id.

    The id is stored on ``request.state.request_id``, bound into the
    logging context and echoed back as ``X-Request-ID``. It is also the
    token returned in opaque 500 bodies.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = uuid4().hex[:16]
        request.state.request_id = request_id
        bind_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            clear_context()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Turn exceptions no handler claimed into the opaque 500.

    Must stay the innermost middleware: the 500 then passes through the
    request context, CORS and security header layers.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await unhandled_error_handler(request, exc)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information."""

        start_time = perf_counter()
        logger.info(f"Request: {request.method} {request.url.path}, from ip: {host(request)}")

        response = await call_next(request)
        duration = perf_counter() - start_time

        logger.info(
            f"Response: {response.status_code} for {request.method} {request.url.path}",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


class AllowListCORSMiddleware(BaseHTTPMiddleware):
    """
    CORS with an explicit origin allow-list.

    Listed origins are echoed back. Any other origin, or a request with no
    ``Origin`` header, gets ``Access-Control-Allow-Origin: null`` so that
    browsers refuse the response. Preflight ``OPTIONS`` requests are
    answered here with 204 and never reach the routes.
    """

    def __init__(self, app: ASGIApp, allow_origins: Sequence[str] = ()) -> None:
        super().__init__(app)
        self.allow_origins = frozenset(allow_origins)

    def cors_headers(self, origin: str | None) -> dict[str, str]:
        allowed = origin if origin and origin in self.allow_origins else "null"
        return {
            "Access-Control-Allow-Origin": allowed,
            "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
            "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
            "Access-Control-Max-Age": str(CORS_MAX_AGE),
            "Vary": "Origin",
        }

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        headers = self.cors_headers(request.headers.get("origin"))

        if request.method == "OPTIONS":
            return Response(status_code=HTTP_204_NO_CONTENT, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    app.add_middleware(AllowListCORSMiddleware, allow_origins=settings.ALLOWED_ORIGINS)
