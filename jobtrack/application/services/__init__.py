"""Service orchestrators."""

from .job_service import JobService
from .service_registry import ServiceRegistryService

__all__ = [
    "JobService",
    "ServiceRegistryService",
]
