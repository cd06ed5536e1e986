"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.configs import Settings, settings
from app.monitoring.logging import get_logger

logger = get_logger(__name__)


def engine_options(config: Settings) -> dict[str, Any]:
    """
    Keyword arguments for ``create_async_engine``.

    SQLite gets a single shared connection for in-memory databases and no
    pool sizing; Postgres gets a pool plus a server-side statement timeout
    matching ``DB_STATEMENT_TIMEOUT``.
    """
    options: dict[str, Any] = {"echo": config.DATABASE_ECHO}

    if config.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in config.DATABASE_URL:
            options["poolclass"] = StaticPool
        return options

    timeout_ms = int(config.DB_STATEMENT_TIMEOUT * 1000)
    options.update(
        pool_size=config.POOL_SIZE,
        max_overflow=config.MAX_OVERFLOW,
        pool_recycle=config.POOL_RECYCLE,
        pool_pre_ping=True,
        connect_args={
            "command_timeout": config.DB_STATEMENT_TIMEOUT,
            "server_settings": {
                "statement_timeout": str(timeout_ms),
                "lock_timeout": str(timeout_ms),
            },
        },
    )
    return options


def create_engine(config: Settings) -> AsyncEngine:
    new_engine = create_async_engine(config.DATABASE_URL, **engine_options(config))

    if config.is_sqlite:

        @event.listens_for(new_engine.sync_engine, "connect")
        def enable_foreign_keys(dbapi_connection: Any, connection_record: object) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


def create_session_maker(bind: AsyncEngine) -> async_sessionmaker[SQLModelAsyncSession]:
    return async_sessionmaker(
        bind,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine: AsyncEngine = create_engine(settings)

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = create_session_maker(engine)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    The session commits when the request handler returns and rolls back
    when it raises.

    Yields:
        AsyncSession: Database session
    """
    async with transaction() as session:
        yield session


@asynccontextmanager
async def transaction(
    session_maker: async_sessionmaker[SQLModelAsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Yields:
        AsyncSession: Database session within a transaction

    Example:
        ```python
        async with transaction() as session:
            session.add(CategoryDB(name="News", slug="news"))
            # Commits on successful exit, rolls back on exception
        ```
    """
    async with (session_maker or async_session_maker)() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.warning("Transaction rolled back")
            raise


async def init_db(bind: AsyncEngine | None = None) -> None:
    """
    Create any missing tables.

    Note:
        Production schemas are managed by Alembic migrations; this only
        fills in tables that do not exist yet.
    """
    async with (bind or engine).begin() as conn:
        # Import all models to ensure they are registered
        from app.models import CategoryDB, CommentDB, PostDB  # noqa: F401, PLC0415

        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database initialized")


async def close_db() -> None:
    """Dispose of the engine's connection pool."""
    await engine.dispose()
    logger.info("Database connections closed")
