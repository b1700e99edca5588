"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory SQLite async database, job snapshot factories
Dependencies: pytest, pytest_asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from datetime import datetime, timezone
from typing import Any

import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def test_async_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine bound to a single shared in-memory connection
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from jobtrack.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_async_db(test_async_engine):
    """
    Create an async session on the in-memory database.

    Yields:
        AsyncSession: Test database session, rolled back afterwards
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    async_session = async_sessionmaker(
        test_async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


def make_payload(
    route: list[str] | None = None,
    complete: list[str] | None = None,
    job: str | None = None,
    error: Any = None,
    action: str | None = None,
) -> dict[str, Any]:
    """Build a producer-shaped payload, omitting unset fields."""
    payload: dict[str, Any] = {}
    router: dict[str, Any] = {}
    if route is not None:
        router["route"] = route
    if action is not None:
        router["action"] = action
    if router:
        payload["data"] = {"router": router}
    if complete is not None:
        payload["complete"] = complete
    if job is not None:
        payload["job"] = job
    if error is not None:
        payload["error"] = error
    return payload


@pytest.fixture
def job_event_factory():
    """
    Factory for unsaved JobEventModel instances.

    Returns:
        Callable: (id, message_id, payload, status, account_id) -> JobEventModel
    """
    from jobtrack.boundary.db.models.job_event_model import JobEventModel

    def _make(
        id: int = 1,
        message_id: str = "m1",
        payload: dict[str, Any] | None = None,
        status: str | None = None,
        account_id: int = 1,
    ) -> JobEventModel:
        return JobEventModel(
            id=id,
            message_id=message_id,
            account_id=account_id,
            payload=payload if payload is not None else {},
            status=status,
            created_at=datetime.now(timezone.utc),
        )

    return _make


@pytest.fixture
def payload_factory():
    """Provide make_payload for building producer-shaped payloads."""
    return make_payload
