"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: jobtrack.configs, jobtrack.application, jobtrack.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobtrack.application.services import JobService, ServiceRegistryService
from jobtrack.boundary.db import get_async_db
from jobtrack.boundary.db.queries.projection import ProjectionQueryBuilder
from jobtrack.configs import get_settings


def get_projection_builder() -> ProjectionQueryBuilder:
    """
    Get projection builder bound to the configured database dialect.

    Returns:
        ProjectionQueryBuilder: Builder for "sqlite" or "postgresql"
    """
    settings = get_settings()
    dialect_name = "sqlite" if settings.database.is_sqlite else "postgresql"
    return ProjectionQueryBuilder(dialect_name=dialect_name)


def get_job_service(
    db: AsyncSession = Depends(get_async_db),
    projection_builder: ProjectionQueryBuilder = Depends(get_projection_builder),
) -> JobService:
    """
    Get job service instance.

    Args:
        db: Async database session (injected via Depends)
        projection_builder: Dialect-bound projection builder (injected)

    Returns:
        JobService: Job service instance
    """
    return JobService(db=db, projection_builder=projection_builder)


def get_service_registry(db: AsyncSession = Depends(get_async_db)) -> ServiceRegistryService:
    """
    Get service registry instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ServiceRegistryService: Service registry instance
    """
    return ServiceRegistryService(db=db)
