"""API test fixtures — async DB + FastAPI test client with identity headers.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
"""

from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import chickquita.infrastructure.database as db_module
import chickquita.models  # noqa: F401
from chickquita.db.base import Base
from chickquita.infrastructure.database import DatabaseSessionManager, get_db
from chickquita.main import app


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
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def tenant_headers():
    return {"X-User-Id": str(uuid4()), "X-Tenant-Id": str(uuid4())}


@pytest.fixture
async def client(test_engine, test_session_factory, tenant_headers):
    """FastAPI test client with DB dependency overridden and identity headers set."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
        headers=tenant_headers,
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
