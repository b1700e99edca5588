"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from jobtrack.boundary.db.CRUD import job_event_crud, service_crud

    # Use singleton instances
    current = await job_event_crud.get_current(db, message_id)

    # Or instantiate classes directly for custom behavior
    from jobtrack.boundary.db.CRUD import JobEventCRUD
    custom_crud = JobEventCRUD()
"""

from jobtrack.boundary.db.CRUD.base_crud import BaseCRUD
from jobtrack.boundary.db.CRUD.job_event_crud import JobEventCRUD, job_event_crud
from jobtrack.boundary.db.CRUD.service_crud import ServiceCRUD, service_crud

__all__ = [
    "BaseCRUD",
    "JobEventCRUD",
    "job_event_crud",
    "ServiceCRUD",
    "service_crud",
]
