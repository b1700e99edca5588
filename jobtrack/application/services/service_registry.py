"""
Service registry orchestrator.

Registers the pipeline services that route entries resolve to and lists
them for operators.

Dependencies: jobtrack.boundary.db.CRUD, jobtrack.core.exceptions
System role: Service registry use cases
"""

import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from jobtrack.boundary.db.CRUD.service_crud import service_crud
from jobtrack.boundary.db.models.service_model import ServiceModel
from jobtrack.core.exceptions import DuplicateServiceError, ValidationError

logger = logging.getLogger(__name__)


class ServiceRegistryService:
    """Service registry orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize registry with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def register_service(self, name: str, description: str | None = None) -> ServiceModel:
        """
        Register a service under a unique name.

        Args:
            name: Service name as producers write it in routes
            description: Optional human-readable description

        Returns:
            ServiceModel: Stored service (flushed, not committed)

        Raises:
            ValidationError: If name is blank
            DuplicateServiceError: If the name is already registered
        """
        if not name or not name.strip():
            raise ValidationError("name is required", field="name")
        if await service_crud.get_by_name(self.db, name) is not None:
            raise DuplicateServiceError(name)

        service = await service_crud.create(self.db, name=name, description=description)
        logger.info("Service registered", extra={"service_id": service.id, "service_name": name})
        return service

    async def list_services(self, limit: int | None = None, offset: int = 0) -> Sequence[ServiceModel]:
        """Registered services in registration order."""
        return await service_crud.get_all(self.db, limit=limit, offset=offset)
