# tests/errors/test_base.py
"""Tests for the error taxonomy and exception handlers."""

from unittest.mock import MagicMock

import orjson
import pytest
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.errors import (
    BaseAppError,
    DatabaseError,
    DatabaseTimeoutError,
    DuplicateEntryError,
    ErrorCode,
    InvalidCredentialError,
    MissingCredentialError,
    RateLimitError,
    RecordNotFoundError,
    ValidationError,
    create_exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)


def mock_request(request_id: str | None = "req-123") -> MagicMock:
    request = MagicMock()
    request.client.host = "192.168.1.1"
    request.url.path = "/api/test"
    request.state.request_id = request_id
    return request


class TestBaseAppError:
    def test_default_values(self) -> None:
        error = BaseAppError()
        assert error.detail == "Internal Server Error"
        assert error.status_code == 500
        assert error.headers is None

    def test_str_representation(self) -> None:
        assert str(BaseAppError("Test error")) == "Test error"

    def test_content_omits_empty_details(self) -> None:
        assert BaseAppError("Oops", 400).to_content() == {"error": "Oops"}
        assert BaseAppError("Oops", 400, details="more").to_content() == {
            "error": "Oops",
            "details": "more",
        }


class TestTaxonomy:
    def test_validation_error_carries_code(self) -> None:
        error = ValidationError("Bad slug", code=ErrorCode.INVALID_SLUG)
        assert error.status_code == 400
        assert error.to_content() == {"error": "Bad slug", "code": "invalid_slug"}

    def test_auth_errors(self) -> None:
        missing = MissingCredentialError()
        assert missing.status_code == 401
        assert missing.to_content()["error"] == "API key required"
        assert "X-API-Key" in missing.to_content()["details"]
        assert InvalidCredentialError().status_code == 403

    def test_rate_limit_error(self) -> None:
        error = RateLimitError(retry_after=17)
        assert error.status_code == 429
        assert error.headers == {"Retry-After": "17"}
        assert error.to_content() == {"error": "Rate limit exceeded", "retryAfter": 17}

    def test_database_errors_exposure(self) -> None:
        assert DatabaseError.expose is False
        assert DatabaseTimeoutError.expose is False
        assert RecordNotFoundError().status_code == 404
        assert DuplicateEntryError().expose is True


class TestCreateExceptionHandler:
    async def test_exposed_error(self) -> None:
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(mock_request(), RecordNotFoundError("Post not found"))

        assert response.status_code == 404
        assert orjson.loads(response.body) == {"error": "Post not found"}
        logger.warning.assert_called_once()
        logger.error.assert_not_called()

    async def test_rate_limit_headers_forwarded(self) -> None:
        handler = create_exception_handler(MagicMock())
        response = await handler(mock_request(), RateLimitError(retry_after=5))
        assert response.status_code == 429
        assert response.headers["Retry-After"] == "5"

    @pytest.mark.parametrize(
        "exc",
        [DatabaseError("SELECT * FROM secrets failed"), RuntimeError("boom"), DatabaseTimeoutError()],
    )
    async def test_internal_errors_are_opaque(self, exc: Exception) -> None:
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(mock_request(), exc)

        assert response.status_code == 500
        assert orjson.loads(response.body) == {
            "error": "Internal server error",
            "requestId": "req-123",
        }
        logger.error.assert_called_once()

    async def test_request_id_minted_when_absent(self) -> None:
        handler = create_exception_handler(MagicMock())
        response = await handler(mock_request(request_id=None), RuntimeError("boom"))
        body = orjson.loads(response.body)
        assert isinstance(body["requestId"], str)
        assert body["requestId"]


class TestRequestValidationHandler:
    async def test_malformed_json(self) -> None:
        exc = RequestValidationError(
            [{"type": "json_invalid", "loc": ("body", 1), "msg": "JSON decode error"}],
        )
        response = await request_validation_exception_handler(mock_request(), exc)
        assert response.status_code == 400
        assert orjson.loads(response.body) == {
            "error": "Invalid request format",
            "details": "Please check your JSON syntax",
            "code": "invalid_request",
        }

    async def test_bad_parameter(self) -> None:
        exc = RequestValidationError(
            [{"type": "less_than_equal", "loc": ("query", "limit"), "msg": "too big"}],
        )
        response = await request_validation_exception_handler(mock_request(), exc)
        body = orjson.loads(response.body)
        assert response.status_code == 400
        assert body["error"] == "Invalid request parameters"
        assert body["details"] == "query.limit: too big"


class TestHttpExceptionHandler:
    async def test_not_found(self) -> None:
        response = await http_exception_handler(mock_request(), StarletteHTTPException(404))
        assert response.status_code == 404
        assert orjson.loads(response.body) == {"error": "Not Found"}

    async def test_headers_kept(self) -> None:
        exc = StarletteHTTPException(405, headers={"Allow": "GET, PUT, DELETE"})
        response = await http_exception_handler(mock_request(), exc)
        assert response.status_code == 405
        assert orjson.loads(response.body) == {"error": "Method Not Allowed"}
        assert response.headers["Allow"] == "GET, PUT, DELETE"
