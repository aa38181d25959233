"""
Pytest configuration and fixtures.
Provides test app client and async DB session replacement.
"""

import os

# Settings are read at import time; keep the shared limiter out of the way.
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from practiceflow.main import app
from practiceflow.db.base import Base
from practiceflow.db.session import get_db
import practiceflow.models  # noqa: F401


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def now():
    """Fixed timestamp for the pure engine tests."""
    return datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
async def test_engine():
    """
    Create a test database engine.
    Uses in-memory SQLite for fast tests.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def test_session_maker(test_engine):
    """Sessionmaker bound to the test engine."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture(scope="function")
async def test_db_session(test_session_maker):
    """Create a test database session."""
    async with test_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def test_client(test_session_maker):
    """
    Create a test HTTP client.
    Every request gets its own session on the test database.
    """
    async def override_get_db():
        async with test_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
