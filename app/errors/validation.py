"""Validation errors and the request-validation handler."""

from enum import StrEnum
from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring.logging import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)


class ErrorCode(StrEnum):
    """Machine-readable reason attached to every validation failure."""

    MISSING_FIELDS = "missing_fields"
    EMPTY_FIELD = "empty_field"
    INVALID_SLUG = "invalid_slug"
    INVALID_STATUS = "invalid_status"
    SLUG_EXISTS = "slug_exists"
    UNKNOWN_CATEGORY = "unknown_category"
    TOO_MANY_TAGS = "too_many_tags"
    NO_UPDATE_FIELDS = "no_update_fields"
    INVALID_EMAIL = "invalid_email"
    INVALID_PARENT = "invalid_parent"
    INVALID_REQUEST = "invalid_request"


class ValidationError(BaseAppError):
    """A request payload broke one validation rule."""

    def __init__(
        self,
        detail: str = "Validation Error",
        code: ErrorCode = ErrorCode.INVALID_REQUEST,
        details: str | None = None,
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST, details=details)
        self.code = code

    def to_content(self) -> dict[str, Any]:
        return {**super().to_content(), "code": str(self.code)}


def _describe(error: dict[str, Any]) -> str:
    location = ".".join(str(loc) for loc in error.get("loc", ()) if loc != "body")
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def request_validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Reshape FastAPI's request validation errors into the API's 400 body.

    Malformed JSON, bad query parameters and non-numeric ids all land here.
    Only the first problem is reported.
    """
    errors = cast(RequestValidationError, exc).errors()
    first = errors[0] if errors else {}

    if first.get("type") == "json_invalid":
        error = ValidationError(
            "Invalid request format",
            details="Please check your JSON syntax",
        )
    else:
        error = ValidationError("Invalid request parameters", details=_describe(first))

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}",
        details=error.details,
    )
    return ORJSONResponse(status_code=error.status_code, content=error.to_content())


validation_exception_handler = create_exception_handler(logger)
