"""
Database boundary layer: ORM models, CRUD operations, query builders,
and connection management.

Exports:
  - Base, IntegerIdMixin, CreatedAtMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - JobEventModel, ServiceModel: Core domain entities
  - job_event_crud, service_crud: CRUD operation singletons
  - LatestRecordSelector, ProjectionQueryBuilder: Read-only query composition

Dependencies: sqlalchemy, jobtrack.configs
System role: Database adapter for the append-only job event log
"""

from jobtrack.boundary.db.base import Base, CreatedAtMixin, IntegerIdMixin
from jobtrack.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from jobtrack.boundary.db.models import JobEventModel, ServiceModel
from jobtrack.boundary.db.CRUD import (
    BaseCRUD,
    JobEventCRUD,
    ServiceCRUD,
    job_event_crud,
    service_crud,
)
from jobtrack.boundary.db.queries import (
    LatestRecordSelector,
    ProjectionQueryBuilder,
    latest_record_selector,
)

__all__ = [
    # Base classes
    "Base",
    "CreatedAtMixin",
    "IntegerIdMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "JobEventModel",
    "ServiceModel",
    # CRUD classes
    "BaseCRUD",
    "JobEventCRUD",
    "ServiceCRUD",
    # CRUD singletons
    "job_event_crud",
    "service_crud",
    # Queries
    "LatestRecordSelector",
    "ProjectionQueryBuilder",
    "latest_record_selector",
]
