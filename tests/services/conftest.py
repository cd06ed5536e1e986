# tests/services/conftest.py
"""Fixtures wiring the in-memory repository fakes."""

import pytest

from app.models import CommentDB
from tests.services.fakes import FakeCategories, FakeComments, FakePosts


@pytest.fixture
def posts() -> FakePosts:
    return FakePosts(["taken"])


@pytest.fixture
def categories() -> FakeCategories:
    return FakeCategories([1, 2])


@pytest.fixture
def comments() -> FakeComments:
    return FakeComments(
        [
            CommentDB(id=10, post_id=1, author_name="a", author_email="a@b.co", content="x"),
            CommentDB(id=20, post_id=2, author_name="b", author_email="b@b.co", content="y"),
        ],
    )
