"""Infrastructure test fixtures — fresh in-memory SQLite schema per test.

Invariants:
    - Every test gets an empty database created from Base.metadata
    - Sessions use expire_on_commit=False, like DatabaseSessionManager
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

import chickquita.models  # noqa: F401
from chickquita.db.base import Base


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_db(test_engine):
    factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with factory() as session:
        yield session
