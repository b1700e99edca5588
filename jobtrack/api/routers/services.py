"""
Service registry API endpoints.

Routes:
- POST /services - Register a service
- GET /services - List registered services

Dependencies: jobtrack.application.services.service_registry, jobtrack.models
System role: Service registry HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from jobtrack.api.deps import get_service_registry
from jobtrack.application.services.service_registry import ServiceRegistryService
from jobtrack.core.exceptions import DuplicateServiceError, ValidationError
from jobtrack.models.job import RegisterServiceRequest, ServiceResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/services", tags=["services"])


@router.post("", response_model=ServiceResponse, status_code=201)
async def register_service(
    request: RegisterServiceRequest,
    registry: ServiceRegistryService = Depends(get_service_registry),
) -> ServiceResponse:
    """
    Register a service that route entries can resolve to.

    Raises:
        HTTPException(409): Name already registered
        HTTPException(422): Blank name
    """
    try:
        service = await registry.register_service(request.name, request.description)
        await registry.db.commit()
    except DuplicateServiceError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ServiceResponse.model_validate(service)


@router.get("", response_model=list[ServiceResponse])
async def list_services(
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    registry: ServiceRegistryService = Depends(get_service_registry),
) -> list[ServiceResponse]:
    """List registered services in registration order."""
    services = await registry.list_services(limit=limit, offset=offset)
    return [ServiceResponse.model_validate(service) for service in services]
