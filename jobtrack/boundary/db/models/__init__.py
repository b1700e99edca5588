"""
Database models package.

Exports:
  - JobEventModel: Append-only job snapshot row
  - ServiceModel: Registered pipeline service

Dependencies: sqlalchemy, jobtrack.boundary.db.base
System role: Database model definitions for domain entities
"""

from jobtrack.boundary.db.models.job_event_model import JobEventModel
from jobtrack.boundary.db.models.service_model import ServiceModel

__all__ = [
    "JobEventModel",
    "ServiceModel",
]
