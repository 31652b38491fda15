"""Shared fixtures for jobboard tests.

Store-backed tests run against in-memory SQLite (aiosqlite); every test gets
a fresh database.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import jobboard.models  # noqa: F401  (registers tables on Base.metadata)
from jobboard.core.database import Base

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    """In-memory engine with the schema created; one connection shared by all sessions."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    """Provide a transactional session that rolls back after each test."""
    async with session_factory() as sess:
        async with sess.begin():
            yield sess
            await sess.rollback()
