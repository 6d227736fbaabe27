from __future__ import annotations

import os
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from staffpay.api.deps import get_now
from staffpay.db import get_session
from staffpay.main import app
from staffpay.models import SQLModel
from staffpay.services.employee import InMemoryEmployeeService, set_employee_service

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from sqlalchemy.ext.asyncio import AsyncEngine

# SQLite in memory by default; point TEST_DATABASE_URL at PostgreSQL to run
# against the production dialect.
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")

# 20 March 2025, 12:00 in Sao Paulo.
FIXED_NOW = datetime(2025, 3, 20, 15, 0, tzinfo=UTC)


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Create a fresh database with all tables for each test."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        _engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    else:
        _engine = create_async_engine(TEST_DATABASE_URL)
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield _engine
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await _engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Yield a session on the per-test database."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def employee_service() -> Iterator[InMemoryEmployeeService]:
    """Install an empty in-memory employee directory for the test."""
    svc = InMemoryEmployeeService()
    set_employee_service(svc)
    yield svc
    set_employee_service(InMemoryEmployeeService())


@pytest.fixture
def now() -> datetime:
    """The instant the HTTP layer sees as "now". Override per module as needed."""
    return FIXED_NOW


@pytest.fixture
async def async_client(db_session: AsyncSession, now: datetime) -> AsyncIterator[AsyncClient]:
    """Async HTTP client with the session and clock dependencies overridden."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_session] = _override_get_session
    app.dependency_overrides[get_now] = lambda: now
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
