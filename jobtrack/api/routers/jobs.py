"""
Job API endpoints.

Routes:
- GET /jobs - Derived views of every current job
- POST /jobs/events - Append a job snapshot
- POST /jobs/projections - Flatten payload fields of current jobs
- GET /jobs/{message_id} - Derived view of one job
- GET /jobs/{message_id}/history - Every snapshot of one job
- GET /jobs/{message_id}/services - Completed, pending, and route services
- GET /jobs/events/{event_id} - One stored snapshot by id

Dependencies: jobtrack.application.services.job_service, jobtrack.models
System role: Job tracking HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from jobtrack.api.deps import get_job_service
from jobtrack.application.services.job_service import JobService
from jobtrack.core.exceptions import (
    EventNotFoundError,
    InvalidQuerySpec,
    JobNotFoundError,
    ValidationError,
)
from jobtrack.models.job import (
    JobEventResponse,
    JobView,
    ProjectionRequest,
    RecordEventRequest,
    ServiceResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=list[JobView])
async def list_jobs(
    account_id: list[int] | None = Query(default=None),
    job_service: JobService = Depends(get_job_service),
) -> list[JobView]:
    """
    List derived views of current jobs.

    Args:
        account_id: Optional repeated account restriction
        job_service: Injected JobService

    Returns:
        list[JobView]: One view per logical job
    """
    return await job_service.list_job_views(account_ids=account_id)


@router.post("/events", response_model=JobEventResponse, status_code=201)
async def record_event(
    request: RecordEventRequest,
    job_service: JobService = Depends(get_job_service),
) -> JobEventResponse:
    """
    Append a snapshot for a job.

    Args:
        request: RecordEventRequest with message_id, account_id, payload
        job_service: Injected JobService

    Returns:
        JobEventResponse: Stored snapshot with its assigned id

    Raises:
        HTTPException(422): Missing message_id or account_id
    """
    try:
        event = await job_service.record_event(
            message_id=request.message_id,
            account_id=request.account_id,
            payload=request.payload,
            status=request.status,
        )
        await job_service.db.commit()
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return JobEventResponse.model_validate(event)


@router.post("/projections")
async def run_projection(
    request: ProjectionRequest,
    job_service: JobService = Depends(get_job_service),
) -> list[dict]:
    """
    Flatten payload fields of current jobs into columns.

    Args:
        request: ProjectionRequest with collections, scalars, account_ids
        job_service: Injected JobService

    Returns:
        list[dict]: Job rows with one extra key per alias

    Raises:
        HTTPException(422): More than one collection or invalid alias/path
    """
    try:
        return await job_service.run_projection(
            collections=request.collections,
            scalars=request.scalars,
            account_ids=request.account_ids,
        )
    except InvalidQuerySpec as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/{message_id}", response_model=JobView)
async def get_job(
    message_id: str,
    job_service: JobService = Depends(get_job_service),
) -> JobView:
    """
    Get the derived view of a job's current snapshot.

    Raises:
        HTTPException(404): Job not found
    """
    try:
        return await job_service.job_view(message_id)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{message_id}/history", response_model=list[JobEventResponse])
async def get_job_history(
    message_id: str,
    job_service: JobService = Depends(get_job_service),
) -> list[JobEventResponse]:
    """
    Get every snapshot of a job, oldest first.

    Raises:
        HTTPException(404): Job not found
    """
    try:
        events = await job_service.history(message_id)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [JobEventResponse.model_validate(event) for event in events]


@router.get("/{message_id}/services")
async def get_job_services(
    message_id: str,
    resolve: bool = False,
    job_service: JobService = Depends(get_job_service),
) -> dict:
    """
    Get completed, pending, and route services of a job.

    With resolve=true, names are replaced by registered service entities and
    names without a registered service are left out.

    Args:
        message_id: Logical job key
        resolve: Resolve names to service entities
        job_service: Injected JobService

    Returns:
        dict: completed, pending, and route lists

    Raises:
        HTTPException(404): Job not found
    """
    try:
        job = await job_service.get_current_job(message_id)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    lists = await job_service.service_lists(job, resolve_entities=resolve)
    if resolve:
        return {
            key: [ServiceResponse.model_validate(s).model_dump() for s in services]
            for key, services in lists.items()
        }
    return lists


@router.get("/events/{event_id}", response_model=JobEventResponse)
async def get_job_event(
    event_id: int,
    job_service: JobService = Depends(get_job_service),
) -> JobEventResponse:
    """
    Get one stored snapshot by id, current or not.

    Declared after the message_id routes so a job named "events" keeps its
    history and services paths.

    Raises:
        HTTPException(404): Event not found
    """
    try:
        event = await job_service.get_event(event_id)
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return JobEventResponse.model_validate(event)
