# tests/routes/helpers.py
"""Shared constants and request helpers for route tests."""

from typing import Any

from httpx import AsyncClient

API_KEY = "test-secret"
AUTH_HEADERS = {"X-API-Key": API_KEY}


async def create_post(client: AsyncClient, **fields: Any) -> dict[str, Any]:
    body = {"title": "Hello World!", "content": "c", "author": "a", **fields}
    response = await client.post("/api/posts", json=body, headers=AUTH_HEADERS)
    assert response.status_code == 201, response.text
    return response.json()
