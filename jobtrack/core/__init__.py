"""
Core domain logic: payload view, status derivation, and route services.

Everything in this package is a pure function of already-loaded job
snapshots; storage access lives in jobtrack.boundary.
"""

from jobtrack.core.job_status import JobStatus, JobStatusEngine
from jobtrack.core.payload import JobPayload
from jobtrack.core.route_services import RouteServiceResolver, ServiceCatalog

__all__ = [
    "JobPayload",
    "JobStatus",
    "JobStatusEngine",
    "RouteServiceResolver",
    "ServiceCatalog",
]
