"""Tests for app/services/comment_validator.py."""

import pytest

from app.errors import ErrorCode, ValidationError
from app.schemas.comment import CommentCreate
from app.services.comment_validator import CommentValidator
from tests.services.fakes import FakeComments


@pytest.fixture
def validator(comments: FakeComments) -> CommentValidator:
    return CommentValidator(comments)


def comment(**fields: object) -> CommentCreate:
    body = {"authorName": "Reader", "authorEmail": "reader@example.com", "content": "Nice!", **fields}
    return CommentCreate.model_validate(body)


class TestCommentValidator:
    async def test_valid_comment(self, validator: CommentValidator) -> None:
        draft = await validator.validate(1, comment(content="<b>Nice</b> post"))
        assert draft.post_id == 1
        assert draft.content == "Nice post"
        assert draft.parent_id is None

    async def test_reply_on_same_post(self, validator: CommentValidator) -> None:
        draft = await validator.validate(1, comment(parentId=10))
        assert draft.parent_id == 10

    @pytest.mark.parametrize("parent_id", [20, 999])
    async def test_reply_must_target_same_post(
        self,
        validator: CommentValidator,
        parent_id: int,
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await validator.validate(1, comment(parentId=parent_id))
        assert exc_info.value.code is ErrorCode.INVALID_PARENT

    @pytest.mark.parametrize("field", ["authorName", "authorEmail", "content"])
    async def test_required_fields(self, validator: CommentValidator, field: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await validator.validate(1, comment(**{field: ""}))
        assert exc_info.value.code is ErrorCode.MISSING_FIELDS

    @pytest.mark.parametrize("email", ["nope", "a@b", "a b@c.d", "@example.com"])
    async def test_invalid_email(self, validator: CommentValidator, email: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await validator.validate(1, comment(authorEmail=email))
        assert exc_info.value.code is ErrorCode.INVALID_EMAIL

    async def test_markup_only_content_rejected(self, validator: CommentValidator) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await validator.validate(1, comment(content="<script>x</script>"))
        assert exc_info.value.code is ErrorCode.EMPTY_FIELD
