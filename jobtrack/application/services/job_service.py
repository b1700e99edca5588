"""
Job service orchestrator.

Coordinates the job event log, latest-snapshot selection, payload
projections, and status derivation into the operations exposed to the API.

Dependencies: jobtrack.boundary.db, jobtrack.core
System role: Job tracking use case orchestration
"""

import logging
from typing import Any, Iterable, Mapping, Sequence

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from jobtrack.boundary.db.CRUD.job_event_crud import job_event_crud
from jobtrack.boundary.db.CRUD.service_crud import service_crud
from jobtrack.boundary.db.models.job_event_model import JobEventModel
from jobtrack.boundary.db.queries.latest import AccountFilter
from jobtrack.boundary.db.queries.projection import JsonPath, ProjectionQueryBuilder
from jobtrack.core.exceptions import EventNotFoundError, JobNotFoundError, ValidationError
from jobtrack.core.job_status import JobStatus, JobStatusEngine, job_status_engine
from jobtrack.core.route_services import RouteServiceResolver, ServiceCatalog
from jobtrack.models.job import JobView

logger = logging.getLogger(__name__)


class JobService:
    """
    Job service orchestrator.

    Reads only ever see committed snapshots; derived views are recomputed
    from the current snapshot on every call and never stored.
    """

    def __init__(
        self,
        db: AsyncSession,
        projection_builder: ProjectionQueryBuilder | None = None,
        status_engine: JobStatusEngine = job_status_engine,
    ) -> None:
        """
        Initialize job service.

        Args:
            db: AsyncSession for database operations
            projection_builder: Builder bound to the database dialect
            status_engine: Status and progress rules
        """
        self.db = db
        self.projection_builder = projection_builder or ProjectionQueryBuilder()
        self.status_engine = status_engine

    async def record_event(
        self,
        message_id: str,
        account_id: int,
        payload: dict[str, Any] | None = None,
        status: str | None = None,
    ) -> JobEventModel:
        """
        Append a snapshot to the job event log.

        Args:
            message_id: Logical job key
            account_id: Owning account
            payload: Execution state document
            status: Optional explicit status override

        Returns:
            JobEventModel: Stored snapshot (flushed, not committed)

        Raises:
            ValidationError: If message_id or account_id is missing
        """
        if not message_id:
            raise ValidationError("message_id is required", field="message_id")
        if account_id is None:
            raise ValidationError("account_id is required", field="account_id")

        event = await job_event_crud.append(
            self.db,
            message_id=message_id,
            account_id=account_id,
            payload=payload,
            status=status,
        )
        logger.info(
            "Job event recorded",
            extra={"event_id": event.id, "message_id": message_id, "account_id": account_id},
        )
        return event

    async def current_job_ids(self, account_ids: AccountFilter = None) -> set[int]:
        """Ids of the current snapshot of every job."""
        return await job_event_crud.get_current_ids(self.db, account_ids)

    async def current_jobs(self, account_ids: AccountFilter = None) -> Sequence[JobEventModel]:
        """Current snapshot of every job, one per message_id."""
        return await job_event_crud.get_current_jobs(self.db, account_ids)

    async def get_current_job(self, message_id: str) -> JobEventModel:
        """
        Current snapshot of one job.

        Args:
            message_id: Logical job key

        Returns:
            JobEventModel: Newest snapshot

        Raises:
            JobNotFoundError: If no snapshot was ever recorded
        """
        job = await job_event_crud.get_current(self.db, message_id)
        if job is None:
            raise JobNotFoundError(message_id)
        return job

    async def get_event(self, event_id: int) -> JobEventModel:
        """
        One stored snapshot by its id, current or not.

        Raises:
            EventNotFoundError: If no event has that id
        """
        event = await job_event_crud.get_by_id(self.db, event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def history(self, message_id: str) -> Sequence[JobEventModel]:
        """
        Every snapshot of one job, oldest first.

        Raises:
            JobNotFoundError: If no snapshot was ever recorded
        """
        events = await job_event_crud.get_history(self.db, message_id)
        if not events:
            raise JobNotFoundError(message_id)
        return events

    def project(
        self,
        collections: Mapping[str, JsonPath] | None = None,
        scalars: Mapping[str, JsonPath] | None = None,
        account_ids: AccountFilter = None,
        id_restrictor: Select | Iterable[int] | None = None,
    ) -> Select:
        """
        Compose a payload projection without executing it.

        Raises:
            InvalidQuerySpec: If more than one collection is requested
        """
        return self.projection_builder.build(
            collections=collections,
            scalars=scalars,
            account_ids=account_ids,
            id_restrictor=id_restrictor,
        )

    async def run_projection(
        self,
        collections: Mapping[str, JsonPath] | None = None,
        scalars: Mapping[str, JsonPath] | None = None,
        account_ids: AccountFilter = None,
    ) -> list[dict[str, Any]]:
        """
        Compose and execute a payload projection.

        Returns:
            list[dict]: One row per current job with the projected columns

        Raises:
            InvalidQuerySpec: If the projection is rejected before execution
        """
        projection = self.project(collections, scalars, account_ids)
        return await job_event_crud.run_projection(self.db, projection)

    def status(self, job: JobEventModel) -> JobStatus | str:
        """Derived or overridden status of a snapshot."""
        return self.status_engine.status(job)

    def percent_complete(self, job: JobEventModel) -> int:
        """Completion percentage of a snapshot, -1 when undefined."""
        return self.status_engine.percent_complete(job)

    def task(self, job: JobEventModel) -> str | None:
        """Task label of a snapshot."""
        return self.status_engine.task(job)

    async def route_resolver(self, job: JobEventModel) -> RouteServiceResolver:
        """
        Resolver backed by the registered services named in a snapshot.

        Services are fetched in one query; names without a registered
        service are left out of the catalog.

        Args:
            job: Snapshot whose route and completions are resolved

        Returns:
            RouteServiceResolver: Resolver with a preloaded catalog
        """
        names = RouteServiceResolver().route_services(job)
        services = await service_crud.get_by_names(self.db, names)
        return RouteServiceResolver(ServiceCatalog(services))

    async def pending_services(self, job: JobEventModel, resolve_entities: bool = False) -> list:
        """Planned remaining services of a snapshot."""
        resolver = await self._resolver_for(job, resolve_entities)
        return resolver.pending_services(job, resolve_entities)

    async def completed_services(self, job: JobEventModel, resolve_entities: bool = False) -> list:
        """Completed services of a snapshot."""
        resolver = await self._resolver_for(job, resolve_entities)
        return resolver.completed_services(job, resolve_entities)

    async def route_services(self, job: JobEventModel, resolve_entities: bool = False) -> list:
        """Completed then pending services of a snapshot."""
        resolver = await self._resolver_for(job, resolve_entities)
        return resolver.route_services(job, resolve_entities)

    async def service_lists(
        self, job: JobEventModel, resolve_entities: bool = False
    ) -> dict[str, list]:
        """
        Completed, pending, and route services of a snapshot at once.

        One resolver serves all three lists, so entity resolution costs a
        single service query.

        Args:
            job: Snapshot to inspect
            resolve_entities: Replace names by registered service entities

        Returns:
            dict: "completed", "pending", and "route" lists
        """
        resolver = await self._resolver_for(job, resolve_entities)
        return {
            "completed": resolver.completed_services(job, resolve_entities),
            "pending": resolver.pending_services(job, resolve_entities),
            "route": resolver.route_services(job, resolve_entities),
        }

    def build_view(self, job: JobEventModel) -> JobView:
        """
        Derived view of a snapshot.

        Args:
            job: Current snapshot of a job

        Returns:
            JobView: Status, progress, task, and service lists
        """
        status = self.status(job)
        resolver = RouteServiceResolver()
        return JobView(
            id=job.id,
            message_id=job.message_id,
            account_id=job.account_id,
            status=status.value if isinstance(status, JobStatus) else status,
            percent_complete=self.percent_complete(job),
            task=self.task(job),
            pending_services=resolver.pending_services(job),
            completed_services=resolver.completed_services(job),
            route_services=resolver.route_services(job),
            created_at=job.created_at,
        )

    async def job_view(self, message_id: str) -> JobView:
        """
        Derived view of a job's current snapshot.

        Raises:
            JobNotFoundError: If no snapshot was ever recorded
        """
        return self.build_view(await self.get_current_job(message_id))

    async def list_job_views(self, account_ids: AccountFilter = None) -> list[JobView]:
        """Derived views of every current job."""
        return [self.build_view(job) for job in await self.current_jobs(account_ids)]

    async def _resolver_for(self, job: JobEventModel, resolve_entities: bool) -> RouteServiceResolver:
        if resolve_entities:
            return await self.route_resolver(job)
        return RouteServiceResolver()
