# app/main.py

"""Blog Edge API - posts, categories and comments behind an API key and a rate limit."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.configs import settings
from app.errors import (
    ApiKeyAuthenticationError,
    BaseAppError,
    DatabaseError,
    RateLimitError,
    ValidationError,
    auth_exception_handler,
    create_exception_handler,
    database_exception_handler,
    http_exception_handler,
    rate_limit_exception_handler,
    request_validation_exception_handler,
    validation_exception_handler,
)
from app.managers import FixedWindowRateLimiter, InMemoryRateWindowStore
from app.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
    UnhandledErrorMiddleware,
    configure_cors,
    lifespan,
)
from app.monitoring import configure_logging, get_logger
from app.routes import ROUTERS
from app.schemas.health import HealthResponse
from app.services import ApiKeyAuthenticator, AuthConfig
from app.utils.helpers import today_str

configure_logging()
logger = get_logger("app")
app_exception_handler = create_exception_handler(logger)

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog Edge API",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

# Added last runs first: request context wraps logging, CORS, headers and the 500 fallback
app.add_middleware(UnhandledErrorMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
configure_cors(app)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

_ = [app.include_router(router) for router in ROUTERS]

errors = [
    (ValidationError, validation_exception_handler),
    (ApiKeyAuthenticationError, auth_exception_handler),
    (RateLimitError, rate_limit_exception_handler),
    (DatabaseError, database_exception_handler),
    (BaseAppError, app_exception_handler),
    (SQLAlchemyError, database_exception_handler),
    (RequestValidationError, request_validation_exception_handler),
    (StarletteHTTPException, http_exception_handler),
    (Exception, app_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.rate_limiter = FixedWindowRateLimiter.from_settings(settings, InMemoryRateWindowStore())
app.state.authenticator = ApiKeyAuthenticator(AuthConfig.from_settings(settings))


@app.get(
    "/api/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "healthy",
                        "timestamp": "2025-01-01T00:00:00Z",
                        "version": "1.0.0",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check() -> HealthResponse:
    """
    Liveness probe. Not rate limited and never touches the database.

    Examples
    --------
    Request
        GET /api/health
    Response
        200 OK
        {"status": "healthy", "timestamp": "2025-01-01T00:00:00Z", "version": "1.0.0"}
    """
    return HealthResponse(timestamp=today_str(), version=app.version)
