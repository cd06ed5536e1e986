# tests/routes/conftest.py
"""End-to-end fixtures: the real app over a fresh in-memory SQLite database."""

from collections.abc import AsyncGenerator

from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from pytest import fixture
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from app.configs import Settings
from app.db import create_engine, create_session_maker, get_session, init_db, transaction
from app.main import app
from app.managers import FixedWindowRateLimiter
from app.models import CategoryDB
from app.services import ApiKeyAuthenticator, AuthConfig
from tests.routes.helpers import API_KEY


@fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    test_engine = create_engine(Settings(DATABASE_URL="sqlite+aiosqlite:///:memory:"))
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_maker(engine)


@fixture
def limiter() -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(limit=1000, window_seconds=60)


@fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
    limiter: FixedWindowRateLimiter,
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing FastAPI endpoints."""

    async def override_get_session() -> AsyncGenerator[AsyncSession]:
        async with transaction(session_maker) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.state.rate_limiter = limiter
    app.state.authenticator = ApiKeyAuthenticator(AuthConfig(api_secret=SecretStr(API_KEY)))

    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app, raise_app_exceptions=False),
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@fixture
async def categories(session_maker: async_sessionmaker[AsyncSession]) -> dict[str, int]:
    """Seed two categories and return their ids by name."""
    async with transaction(session_maker) as session:
        rows = [
            CategoryDB(name="Travel", slug="travel"),
            CategoryDB(name="Food", slug="food", description="Eating well"),
        ]
        session.add_all(rows)
        await session.flush()
        return {row.name: row.id for row in rows}
