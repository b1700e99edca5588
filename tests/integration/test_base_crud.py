"""
Test suite for BaseCRUD and ServiceCRUD against an in-memory SQLite database.

Tests generic reads shared by every CRUD class and name-based service
lookups.

System role: Verification of shared persistence helpers
"""

import pytest
from sqlalchemy import inspect

from jobtrack.boundary.db.CRUD.job_event_crud import JobEventCRUD
from jobtrack.boundary.db.CRUD.service_crud import ServiceCRUD
from jobtrack.boundary.db.create_tables import create_all_tables, drop_all_tables


@pytest.fixture
def job_crud() -> JobEventCRUD:
    """Provide JobEventCRUD instance for testing."""
    return JobEventCRUD()


@pytest.fixture
def service_crud() -> ServiceCRUD:
    """Provide ServiceCRUD instance for testing."""
    return ServiceCRUD()


class TestBaseCRUDReads:
    """Test suite for get_by_id and get_all."""

    async def test_get_by_id_should_return_record(self, job_crud, test_async_db) -> None:
        """Test lookup by primary key."""
        event = await job_crud.append(test_async_db, "m1", 1, {"job": "a"})

        found = await job_crud.get_by_id(test_async_db, event.id)

        assert found is not None
        assert found.payload == {"job": "a"}

    async def test_get_by_id_should_return_none_when_missing(self, job_crud, test_async_db) -> None:
        """Test lookup of an unknown id."""
        assert await job_crud.get_by_id(test_async_db, 999) is None

    async def test_get_all_should_paginate_in_id_order(self, job_crud, test_async_db) -> None:
        """Test pagination over every snapshot."""
        ids = [(await job_crud.append(test_async_db, f"m{i}", 1)).id for i in range(4)]

        page = await job_crud.get_all(test_async_db, limit=2, offset=1)

        assert [event.id for event in page] == ids[1:3]


class TestServiceCRUD:
    """Test suite for ServiceCRUD name lookups."""

    async def test_get_by_name_should_return_registered_service(
        self, service_crud, test_async_db
    ) -> None:
        """Test lookup by unique name."""
        await service_crud.create(test_async_db, name="fetch", description="Download sources")

        service = await service_crud.get_by_name(test_async_db, "fetch")

        assert service.description == "Download sources"
        assert await service_crud.get_by_name(test_async_db, "missing") is None

    async def test_get_by_names_should_ignore_unknown_names(
        self, service_crud, test_async_db
    ) -> None:
        """Test batch lookup returns only registered services."""
        await service_crud.create(test_async_db, name="fetch")
        await service_crud.create(test_async_db, name="build")

        services = await service_crud.get_by_names(test_async_db, ["build", "deploy", "build"])

        assert [service.name for service in services] == ["build"]

    async def test_get_by_names_should_skip_query_for_empty_input(
        self, service_crud, test_async_db
    ) -> None:
        """Test empty input returns no services."""
        assert await service_crud.get_by_names(test_async_db, []) == []


class TestCreateTables:
    """Test suite for schema helpers."""

    async def test_drop_and_create_should_manage_tables(self, test_async_engine) -> None:
        """Test tables disappear on drop and return on create."""

        def table_names(conn) -> list[str]:
            return inspect(conn).get_table_names()

        await drop_all_tables(test_async_engine)
        async with test_async_engine.connect() as conn:
            assert await conn.run_sync(table_names) == []

        await create_all_tables(test_async_engine)
        async with test_async_engine.connect() as conn:
            assert set(await conn.run_sync(table_names)) == {"jobs", "services"}
