"""Dependency injection for FastAPI routes."""

from jobtrack.api.deps.dependencies import (
    get_job_service,
    get_projection_builder,
    get_service_registry,
)

__all__ = ["get_job_service", "get_projection_builder", "get_service_registry"]
