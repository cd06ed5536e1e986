"""Tests for structured logging functionality."""

import pytest

from app.monitoring.logging import (
    bind_request_id,
    clear_context,
    get_request_id,
    redact_pii,
    sanitize_event_dict,
    sanitize_headers,
    sanitize_log_message,
)


@pytest.fixture(autouse=True)
def _clean_context() -> None:
    clear_context()


class TestSanitizeLogMessage:
    def test_newlines_escaped(self) -> None:
        """Newlines should be escaped to prevent log injection."""
        result = sanitize_log_message("Line1\nLine2\rLine3")
        assert "\n" not in result
        assert "\r" not in result
        assert result == "Line1\\nLine2\\rLine3"

    def test_normal_message_unchanged(self) -> None:
        message = "Post created successfully"
        assert sanitize_log_message(message) == message

    def test_non_string_converted(self) -> None:
        assert sanitize_log_message(123) == "123"  # type: ignore[arg-type]


class TestSanitizeHeaders:
    def test_api_key_redacted(self) -> None:
        result = sanitize_headers({"X-API-Key": "secret", "Content-Type": "application/json"})
        assert result == {"X-API-Key": "[REDACTED]", "Content-Type": "application/json"}


class TestRedactPii:
    def test_email_redacted(self) -> None:
        assert redact_pii("Comment by reader@example.com") == "Comment by [REDACTED_EMAIL]"


class TestSanitizeEventDict:
    def test_sensitive_keys_and_strings(self) -> None:
        event = {
            "event": "login\nforged line",
            "api_key": "abc",
            "email": "reader@example.com",
            "headers": {"x-api-key": "abc"},
            "count": 3,
        }
        result = sanitize_event_dict(None, "info", event)
        assert result["event"] == "login\\nforged line"
        assert result["api_key"] == "[REDACTED]"
        assert result["email"] == "[REDACTED_EMAIL]"
        assert result["headers"] == {"x-api-key": "[REDACTED]"}
        assert result["count"] == 3


class TestRequestIdContext:
    def test_bind_and_clear(self) -> None:
        assert get_request_id() is None
        bind_request_id("abc123")
        assert get_request_id() == "abc123"
        clear_context()
        assert get_request_id() is None
