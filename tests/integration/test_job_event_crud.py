"""
Test suite for JobEventCRUD against an in-memory SQLite database.

Tests append-only writes, latest-snapshot selection per job, history
reads, and account scoping.

System role: Verification of job event log persistence
"""

import pytest

from jobtrack.boundary.db.CRUD.job_event_crud import JobEventCRUD
from jobtrack.boundary.db.models.job_event_model import JobEventModel


@pytest.fixture
def crud() -> JobEventCRUD:
    """Provide JobEventCRUD instance for testing."""
    return JobEventCRUD()


@pytest.fixture
async def seeded(crud, test_async_db, payload_factory) -> dict[str, JobEventModel]:
    """
    Seed three jobs, two of them with several snapshots.

    m1: two snapshots (account 1), m2: three snapshots (account 2),
    m3: one snapshot (account 1).
    """
    db = test_async_db
    events = {}
    events["m1_old"] = await crud.append(
        db, "m1", 1, payload_factory(route=["a", "b"], complete=["a"], job="b")
    )
    events["m2_old"] = await crud.append(db, "m2", 2, payload_factory(route=["x", "y", "z"]))
    events["m1_new"] = await crud.append(
        db, "m1", 1, payload_factory(route=["a", "b"], complete=["a", "b"], job="b")
    )
    events["m3"] = await crud.append(db, "m3", 1, {})
    events["m2_mid"] = await crud.append(db, "m2", 2, payload_factory(route=["y", "z"], complete=["x"]))
    events["m2_new"] = await crud.append(
        db, "m2", 2, payload_factory(route=["z"], complete=["x", "y"]), status="paused"
    )
    return events


class TestJobEventCRUDInit:
    """Test suite for JobEventCRUD initialization."""

    def test_init_should_set_model_to_job_event_model(self) -> None:
        """Test JobEventCRUD initializes with JobEventModel."""
        assert JobEventCRUD().model == JobEventModel


class TestJobEventCRUDAppend:
    """Test suite for JobEventCRUD.append()."""

    async def test_append_should_assign_increasing_ids(self, crud, test_async_db) -> None:
        """Test storage assigns monotonically increasing ids."""
        first = await crud.append(test_async_db, "m1", 1, {"job": "a"})
        second = await crud.append(test_async_db, "m1", 1, {"job": "a"})

        assert second.id > first.id
        assert first.created_at is not None

    async def test_append_should_default_payload_to_empty_document(
        self, crud, test_async_db
    ) -> None:
        """Test a missing payload is stored as {}."""
        event = await crud.append(test_async_db, "m1", 1)

        assert event.payload == {}
        assert event.status is None

    def test_crud_should_not_expose_update_or_delete(self, crud) -> None:
        """Test the log has no in-place mutation helpers."""
        assert not hasattr(crud, "update_by_id")
        assert not hasattr(crud, "delete_by_id")


class TestJobEventCRUDCurrent:
    """Test suite for latest-snapshot reads."""

    async def test_get_current_ids_should_keep_max_id_per_job(
        self, crud, test_async_db, seeded
    ) -> None:
        """Test exactly the newest snapshot of each job is current."""
        ids = await crud.get_current_ids(test_async_db)

        assert ids == {seeded["m1_new"].id, seeded["m2_new"].id, seeded["m3"].id}

    async def test_get_current_jobs_should_return_one_row_per_job(
        self, crud, test_async_db, seeded
    ) -> None:
        """Test current jobs are unique per message_id and ordered by id."""
        jobs = await crud.get_current_jobs(test_async_db)

        assert [job.message_id for job in jobs] == ["m1", "m3", "m2"]
        assert [job.id for job in jobs] == sorted(job.id for job in jobs)

    async def test_get_current_jobs_should_be_idempotent(
        self, crud, test_async_db, seeded
    ) -> None:
        """Test reading twice from an unchanged store gives identical results."""
        first = [job.id for job in await crud.get_current_jobs(test_async_db)]
        second = [job.id for job in await crud.get_current_jobs(test_async_db)]

        assert first == second

    async def test_get_current_jobs_should_scope_accounts(
        self, crud, test_async_db, seeded
    ) -> None:
        """Test account restriction keeps only that account's jobs."""
        jobs = await crud.get_current_jobs(test_async_db, account_ids=1)

        assert {job.message_id for job in jobs} == {"m1", "m3"}

    async def test_new_snapshot_should_replace_current(
        self, crud, test_async_db, seeded
    ) -> None:
        """Test appending a snapshot makes it current for that job only."""
        newest = await crud.append(test_async_db, "m3", 1, {"job": "done", "complete": ["done"]})

        ids = await crud.get_current_ids(test_async_db)

        assert newest.id in ids
        assert seeded["m3"].id not in ids
        assert seeded["m1_new"].id in ids

    async def test_get_current_should_return_newest_snapshot(
        self, crud, test_async_db, seeded
    ) -> None:
        """Test single-job read returns the max-id snapshot."""
        job = await crud.get_current(test_async_db, "m2")

        assert job.id == seeded["m2_new"].id
        assert job.status == "paused"

    async def test_get_current_should_return_none_for_unknown_job(
        self, crud, test_async_db, seeded
    ) -> None:
        """Test unknown message_id yields None."""
        assert await crud.get_current(test_async_db, "missing") is None

    async def test_get_current_ids_should_be_empty_for_empty_log(
        self, crud, test_async_db
    ) -> None:
        """Test an empty store has no current jobs."""
        assert await crud.get_current_ids(test_async_db) == set()


class TestJobEventCRUDHistory:
    """Test suite for JobEventCRUD.get_history()."""

    async def test_get_history_should_return_all_snapshots_oldest_first(
        self, crud, test_async_db, seeded
    ) -> None:
        """Test history lists every snapshot of the job by id."""
        history = await crud.get_history(test_async_db, "m2")

        assert [event.id for event in history] == [
            seeded["m2_old"].id,
            seeded["m2_mid"].id,
            seeded["m2_new"].id,
        ]
