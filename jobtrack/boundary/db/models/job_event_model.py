"""
JobEvent ORM model.

One immutable snapshot of a pipeline job's execution state. Snapshots of
the same job share a message_id; the row with the largest id is current.

Dependencies: sqlalchemy, jobtrack.boundary.db.base
System role: Append-only job event log
"""

from typing import Any

from sqlalchemy import JSON, BigInteger, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from jobtrack.boundary.db.base import Base, CreatedAtMixin, IntegerIdMixin


class JobEventModel(Base, IntegerIdMixin, CreatedAtMixin):
    """
    Job snapshot row.

    Rows are inserted by producers and never updated or deleted. Reads that
    need the current state of a job go through the latest-record selector.

    Attributes:
        id: Monotonic identifier; recency tie-break between snapshots
        message_id: Logical job key shared by all snapshots of one job
        account_id: Owning account
        payload: JSON execution state (route, completion markers, error)
        status: Optional explicit status overriding the derived one
        created_at: Snapshot timestamp (UTC)

    Indexes:
        (message_id, id): serves the per-job anti-join and history reads
    """

    __tablename__ = "jobs"
    __table_args__ = (Index("ix_jobs_message_id_id", "message_id", "id"),)

    message_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="Logical job key",
    )

    account_id: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        index=True,
        doc="Owning account identifier",
    )

    payload: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Semi-structured execution state",
    )

    status: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        doc="Explicit status override",
    )

    def __repr__(self) -> str:
        return f"<JobEventModel id={self.id} message_id={self.message_id!r}>"
