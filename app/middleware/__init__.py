from app.middleware.middleware import (
    AllowListCORSMiddleware,
    LoggingMiddleware,
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
    UnhandledErrorMiddleware,
    configure_cors,
    lifespan,
)

__all__ = [
    "AllowListCORSMiddleware",
    "LoggingMiddleware",
    "RequestContextMiddleware",
    "SecurityHeadersMiddleware",
    "UnhandledErrorMiddleware",
    "configure_cors",
    "lifespan",
]
