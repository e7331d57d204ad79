"""Root conftest: shared test configuration and in-memory database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Seeding and verification use their own sessions, never the request's

Design Decisions:
    - StaticPool: one shared connection so every session sees the same :memory: database
"""

import os

# Ensure tests never reach a real database through Settings defaults
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from proptrack.db.base import Base  # noqa: E402
from proptrack.models.property import Property as PropertyModel  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def seed(test_session_factory):
    """Insert properties directly: await seed(id=..., group=..., ...)."""
    async def _seed(**fields) -> PropertyModel:
        async with test_session_factory() as session:
            record = PropertyModel(**fields)
            session.add(record)
            await session.commit()
            await session.refresh(record)
            return record
    return _seed


@pytest.fixture
def count_properties(test_session_factory):
    """Row count read through a fresh session."""
    async def _count() -> int:
        async with test_session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(PropertyModel),
            )
            return result.scalar_one()
    return _count
