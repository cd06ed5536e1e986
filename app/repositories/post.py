"""Post repository for database operations."""

from collections.abc import Sequence

from sqlalchemy import delete, func, select

from app.models.category import CategoryDB
from app.models.comment import CommentDB
from app.models.post import PostDB, PostStatus
from app.repositories.base import BaseRepository
from app.services.post_validator import PostChanges, PostDraft
from app.utils.helpers import utc_now


class PostRepository(BaseRepository[PostDB]):
    """
    Repository for Post database operations.

    ``published_at`` is stamped here, on the first write that leaves a post
    in the ``published`` state, and never touched again.
    """

    model = PostDB
    label = "Post"

    async def create(self, draft: PostDraft) -> PostDB:
        """
        Insert a validated post.

        Args:
            draft: Sanitized post from ``PostValidator.validate_create``

        Returns:
            PostDB: Created post with its store-assigned id

        Raises:
            DuplicateEntryError: If the slug was taken concurrently
        """
        now = utc_now()
        post = PostDB(**draft.columns(), created_at=now, updated_at=now)
        if draft.status is PostStatus.PUBLISHED:
            post.published_at = now
        post.categories = await self._load_categories(draft.category_ids)
        return await self._add_and_refresh(post)

    async def list_posts(
        self,
        page: int = 1,
        limit: int = 10,
        status: PostStatus | None = None,
        category: str | None = None,
    ) -> tuple[list[PostDB], int]:
        """
        Get one page of posts and the total matching count.

        Newest publications come first; never-published posts follow, newest
        first by creation time.

        Returns:
            tuple[list[PostDB], int]: Posts on the page and total matches
        """
        query = select(PostDB)
        if status:
            query = query.where(PostDB.status == status.value)
        if category:
            query = query.where(PostDB.categories.any(CategoryDB.slug == category))  # type: ignore[attr-defined]

        total_result = await self._execute(select(func.count()).select_from(query.subquery()))
        total = total_result.scalar() or 0

        query = (
            query.order_by(
                PostDB.published_at.desc().nulls_last(),  # type: ignore[union-attr]
                PostDB.created_at.desc(),  # type: ignore[attr-defined]
                PostDB.id.desc(),  # type: ignore[union-attr]
            )
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self._execute(query)
        return list(result.scalars().all()), total

    async def slug_exists(self, slug: str) -> bool:
        result = await self._execute(select(1).where(PostDB.slug == slug).limit(1))
        return result.scalar_one_or_none() is not None

    async def update(self, post_id: int, changes: PostChanges) -> PostDB:
        """
        Apply validated changes to a post.

        Raises:
            RecordNotFoundError: If the post does not exist
        """
        post = await self.get_or_raise(post_id)

        for key, value in changes.values.items():
            setattr(post, key, value)
        if changes.category_ids is not None:
            post.categories = await self._load_categories(changes.category_ids)

        now = utc_now()
        if post.status == PostStatus.PUBLISHED and post.published_at is None:
            post.published_at = now
        post.updated_at = now

        return await self._add_and_refresh(post)

    async def delete(self, post_id: int) -> bool:
        """
        Delete a post together with its comments.

        Returns:
            bool: True if the post was deleted, False if not found
        """
        post = await self.get_by_id(post_id)
        if post is None:
            return False

        await self._execute(delete(CommentDB).where(CommentDB.post_id == post_id))  # type: ignore[arg-type]
        await self.session.delete(post)
        await self._run(self.session.flush())
        return True

    async def _load_categories(self, ids: Sequence[int]) -> list[CategoryDB]:
        if not ids:
            return []
        result = await self._execute(select(CategoryDB).where(CategoryDB.id.in_(ids)))  # type: ignore[union-attr]
        return list(result.scalars().all())
