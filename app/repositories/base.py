"""Base repository for database operations."""

from asyncio import wait_for
from collections.abc import Awaitable
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.engine import Result
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable
from sqlmodel import SQLModel

from app.configs import settings
from app.errors.database import (
    DatabaseError,
    DatabaseTimeoutError,
    DuplicateEntryError,
    RecordNotFoundError,
)
from app.monitoring.logging import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)
T = TypeVar("T")


class BaseRepository(Generic[ModelT]):
    """
    Base repository implementing common read and write helpers.

    Every statement is awaited under ``DB_STATEMENT_TIMEOUT``; running past
    it raises ``DatabaseTimeoutError``. Statements are never retried.

    Attributes:
        model: The SQLModel database model type.
        label: Human-readable entity name used in not-found messages.
    """

    model: type[ModelT]
    label: str = "Record"

    def __init__(self, session: AsyncSession, timeout: float | None = None) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
            timeout: Per-statement timeout in seconds
        """
        self.session = session
        self.timeout = settings.DB_STATEMENT_TIMEOUT if timeout is None else timeout

    async def _run(self, awaitable: Awaitable[T]) -> T:
        try:
            return await wait_for(awaitable, self.timeout)
        except TimeoutError as e:
            logger.error("Database statement timed out", timeout=self.timeout, model=self.label)
            raise DatabaseTimeoutError from e

    async def _execute(self, statement: Executable) -> Result[Any]:
        return await self._run(self.session.execute(statement))

    async def get_by_id(self, record_id: int) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record ID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        statement = select(self.model).where(self.model.id == record_id)  # type: ignore[attr-defined]
        result = await self._execute(statement)
        return result.scalar_one_or_none()

    async def get_or_raise(self, record_id: int) -> ModelT:
        """
        Get a record by ID or raise an exception if not found.

        Raises:
            RecordNotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(detail=f"{self.label} not found")
        return record

    async def exists(self, record_id: int) -> bool:
        statement = select(1).where(self.model.id == record_id).limit(1)  # type: ignore[attr-defined]
        result = await self._execute(statement)
        return result.scalar_one_or_none() is not None

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record, flush it and refresh it from the database.

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other integrity errors
        """
        self.session.add(record)
        try:
            await self._run(self.session.flush())
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        await self._run(self.session.refresh(record))
        return record
