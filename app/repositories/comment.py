"""Comment repository for database operations."""

from sqlalchemy import select

from app.models.comment import CommentDB, CommentStatus
from app.repositories.base import BaseRepository
from app.services.comment_validator import CommentDraft


class CommentRepository(BaseRepository[CommentDB]):
    model = CommentDB
    label = "Comment"

    async def list_approved(self, post_id: int) -> list[CommentDB]:
        """Approved comments on a post, oldest first."""
        query = (
            select(CommentDB)
            .where(CommentDB.post_id == post_id)  # type: ignore[arg-type]
            .where(CommentDB.status == CommentStatus.APPROVED.value)  # type: ignore[arg-type]
            .order_by(CommentDB.created_at, CommentDB.id)  # type: ignore[arg-type]
        )
        result = await self._execute(query)
        return list(result.scalars().all())

    async def create(
        self,
        draft: CommentDraft,
        status: CommentStatus = CommentStatus.PENDING,
    ) -> CommentDB:
        """Store a validated comment. New comments wait for moderation."""
        comment = CommentDB(
            post_id=draft.post_id,
            parent_id=draft.parent_id,
            author_name=draft.author_name,
            author_email=draft.author_email,
            content=draft.content,
            status=status.value,
        )
        return await self._add_and_refresh(comment)
