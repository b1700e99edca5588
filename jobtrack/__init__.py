"""
jobtrack: job-progress tracking over an append-only event log.

Collapses job snapshots to the latest record per job, derives status and
progress from the embedded route/completion payload, and composes queries
over nested payload fields.
"""

__version__ = "0.1.0"
