"""Category repository for database operations."""

from collections.abc import Sequence

from sqlalchemy import select

from app.models.category import CategoryDB
from app.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[CategoryDB]):
    model = CategoryDB
    label = "Category"

    async def list_all(self) -> list[CategoryDB]:
        """All categories ordered by name."""
        result = await self._execute(select(CategoryDB).order_by(CategoryDB.name))
        return list(result.scalars().all())

    async def get_by_ids(self, ids: Sequence[int]) -> list[CategoryDB]:
        if not ids:
            return []
        result = await self._execute(select(CategoryDB).where(CategoryDB.id.in_(ids)))  # type: ignore[union-attr]
        return list(result.scalars().all())
