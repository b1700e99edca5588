"""
Job status and progress derivation.

Derives a normalized execution status and completion percentage from a job
snapshot. Derivations are recomputed on every read and never stored.

Dependencies: jobtrack.core.payload
System role: Human-facing status logic for job snapshots
"""

import enum
from typing import Any, Protocol

from jobtrack.core.payload import JobPayload

UNDEFINED_PROGRESS = -1


class JobStatus(str, enum.Enum):
    """
    Derived execution states.

    ERROR: Snapshot carries an error marker
    COMPLETE: Terminal step appears among the completion markers
    IN_PROGRESS: Anything else
    """

    ERROR = "error"
    COMPLETE = "complete"
    IN_PROGRESS = "in_progress"


class JobSnapshot(Protocol):
    """Anything exposing a status override column and a raw payload."""

    status: str | None
    payload: dict[str, Any] | None


def payload_of(job: JobSnapshot) -> JobPayload:
    """Typed payload view for a snapshot."""
    return JobPayload.from_raw(job.payload)


class JobStatusEngine:
    """
    Status and progress rules for job snapshots.

    Stateless: every method is a pure function of the snapshot passed in.
    """

    def status(self, job: JobSnapshot) -> JobStatus | str:
        """
        Resolve the job status.

        An explicit status column wins verbatim. Otherwise an error marker
        yields ERROR, a completed terminal step yields COMPLETE, and anything
        else is IN_PROGRESS.

        Args:
            job: Snapshot to inspect

        Returns:
            JobStatus | str: Override value, or derived status
        """
        if job.status is not None:
            return job.status
        payload = payload_of(job)
        if payload.has_error:
            return JobStatus.ERROR
        if payload.job is not None and payload.job in payload.complete:
            return JobStatus.COMPLETE
        return JobStatus.IN_PROGRESS

    def percent_complete(self, job: JobSnapshot) -> int:
        """
        Percentage of the job completed.

        `done` counts whole-step completion markers. The total is the number
        of distinct names across those markers and the remaining route.

        Args:
            job: Snapshot to inspect

        Returns:
            int: 0-100, or -1 when neither route nor completions are recorded
        """
        payload = payload_of(job)
        done = payload.completed_steps
        total = set(done) | set(payload.route)
        if not total:
            return UNDEFINED_PROGRESS
        # duplicate completion markers can outnumber the distinct total
        return min(100, len(done) * 100 // len(total))

    def task(self, job: JobSnapshot) -> str | None:
        """
        Task label of the job.

        Args:
            job: Snapshot to inspect

        Returns:
            str | None: Router action, falling back to the terminal step
        """
        payload = payload_of(job)
        return payload.action or payload.job


job_status_engine = JobStatusEngine()
