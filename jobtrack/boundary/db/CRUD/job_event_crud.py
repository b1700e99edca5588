"""
Job event CRUD operations.

Append and read operations for JobEventModel. Current-state reads go
through the latest-record selector; nothing here updates or deletes rows.

Dependencies: sqlalchemy, jobtrack.boundary.db.models, jobtrack.boundary.db.queries
System role: Job event log persistence
"""

from typing import Any, Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from jobtrack.boundary.db.CRUD.base_crud import BaseCRUD
from jobtrack.boundary.db.models.job_event_model import JobEventModel
from jobtrack.boundary.db.queries.latest import AccountFilter, latest_record_selector


class JobEventCRUD(BaseCRUD[JobEventModel]):
    """
    CRUD operations for JobEventModel.

    Extends BaseCRUD with append and latest-snapshot queries.
    """

    def __init__(self) -> None:
        """Initialize JobEventCRUD with JobEventModel."""
        super().__init__(JobEventModel)

    async def append(
        self,
        session: AsyncSession,
        message_id: str,
        account_id: int,
        payload: dict[str, Any] | None = None,
        status: str | None = None,
    ) -> JobEventModel:
        """
        Append a new snapshot for a job.

        Args:
            session: Async database session
            message_id: Logical job key
            account_id: Owning account
            payload: Execution state document
            status: Optional explicit status override

        Returns:
            JobEventModel with its storage-assigned id
        """
        return await self.create(
            session,
            message_id=message_id,
            account_id=account_id,
            payload=payload or {},
            status=status,
        )

    async def get_current_ids(
        self,
        session: AsyncSession,
        account_ids: AccountFilter = None,
    ) -> set[int]:
        """
        Retrieve ids of the current snapshot of every job.

        Args:
            session: Async database session
            account_ids: Optional account restriction

        Returns:
            Set of current event ids
        """
        result = await session.execute(latest_record_selector.current_ids(account_ids))
        return set(result.scalars().all())

    async def get_current_jobs(
        self,
        session: AsyncSession,
        account_ids: AccountFilter = None,
    ) -> Sequence[JobEventModel]:
        """
        Retrieve the current snapshot of every job.

        Args:
            session: Async database session
            account_ids: Optional account restriction

        Returns:
            One JobEventModel per message_id, ordered by id
        """
        result = await session.execute(latest_record_selector.current_jobs(account_ids))
        return result.scalars().all()

    async def get_current(
        self,
        session: AsyncSession,
        message_id: str,
    ) -> JobEventModel | None:
        """
        Retrieve the current snapshot of one job.

        Args:
            session: Async database session
            message_id: Logical job key

        Returns:
            Newest JobEventModel for message_id, None if never recorded
        """
        stmt = (
            select(JobEventModel)
            .where(JobEventModel.message_id == message_id)
            .order_by(JobEventModel.id.desc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_history(
        self,
        session: AsyncSession,
        message_id: str,
    ) -> Sequence[JobEventModel]:
        """
        Retrieve every snapshot of one job.

        Args:
            session: Async database session
            message_id: Logical job key

        Returns:
            Sequence of JobEventModels, oldest first
        """
        stmt = (
            select(JobEventModel)
            .where(JobEventModel.message_id == message_id)
            .order_by(JobEventModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def run_projection(
        self,
        session: AsyncSession,
        projection: Select,
    ) -> list[dict[str, Any]]:
        """
        Execute a composed projection.

        Args:
            session: Async database session
            projection: Select built by ProjectionQueryBuilder

        Returns:
            Rows as dicts keyed by column name
        """
        result = await session.execute(projection)
        return [dict(row) for row in result.mappings().all()]


job_event_crud = JobEventCRUD()
