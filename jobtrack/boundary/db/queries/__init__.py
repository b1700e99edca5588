"""
Read-only query composition over the job event log.

Exports:
  - LatestRecordSelector, latest_record_selector: current snapshot per job
  - ProjectionQueryBuilder: payload fields flattened into columns

Nothing here executes SQL; every builder returns a composable Select.
"""

from jobtrack.boundary.db.queries.latest import LatestRecordSelector, latest_record_selector
from jobtrack.boundary.db.queries.projection import ProjectionQueryBuilder

__all__ = [
    "LatestRecordSelector",
    "latest_record_selector",
    "ProjectionQueryBuilder",
]
