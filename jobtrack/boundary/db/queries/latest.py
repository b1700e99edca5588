"""
Latest-record selection for the job event log.

Computes the current snapshot per logical job (message_id): the event
for which no other event with the same message_id has a larger id.

Dependencies: sqlalchemy, jobtrack.boundary.db.models
System role: Last-write-wins view over the append-only log
"""

from typing import Iterable, TypeVar

from sqlalchemy import Select, and_, select
from sqlalchemy.orm import aliased

from jobtrack.boundary.db.models.job_event_model import JobEventModel

EventT = TypeVar("EventT")

AccountFilter = int | Iterable[int] | None


def account_id_list(account_ids: AccountFilter) -> list[int] | None:
    """
    Normalize an account filter to a list.

    Args:
        account_ids: Single account id, iterable of ids, or None

    Returns:
        list[int] | None: Account ids, or None when no filter applies
    """
    if account_ids is None:
        return None
    if isinstance(account_ids, int):
        return [account_ids]
    return [account_id for account_id in account_ids if account_id is not None]


class LatestRecordSelector:
    """
    Current-snapshot selection.

    current_ids() is a self anti-join: a row is current when the LEFT JOIN
    to any newer row of the same message_id finds nothing. The result is a
    single Select, so callers can keep filtering or embed it in IN clauses.
    """

    def current_ids(self, account_ids: AccountFilter = None) -> Select:
        """
        Select ids of current snapshots.

        Args:
            account_ids: Optional account restriction

        Returns:
            Select: SELECT jobs.id of the newest row per message_id
        """
        newer = aliased(JobEventModel, name="j2")
        stmt = (
            select(JobEventModel.id)
            .outerjoin(
                newer,
                and_(
                    JobEventModel.message_id == newer.message_id,
                    JobEventModel.id < newer.id,
                ),
            )
            .where(newer.id.is_(None))
            .correlate(None)
        )
        accounts = account_id_list(account_ids)
        if accounts is not None:
            stmt = stmt.where(JobEventModel.account_id.in_(accounts))
        return stmt

    def current_jobs(self, account_ids: AccountFilter = None) -> Select:
        """
        Select current snapshot rows, oldest job first.

        Args:
            account_ids: Optional account restriction

        Returns:
            Select: ORM select of JobEventModel restricted to current ids
        """
        return (
            select(JobEventModel)
            .where(JobEventModel.id.in_(self.current_ids(account_ids)))
            .order_by(JobEventModel.id)
        )

    @staticmethod
    def select_latest(events: Iterable[EventT]) -> list[EventT]:
        """
        In-memory equivalent of current_ids() for already-fetched events.

        Keeps the max-id event per message_id in a single pass.

        Args:
            events: Objects exposing `id` and `message_id`

        Returns:
            list: One event per message_id, ordered by id
        """
        latest: dict[str, EventT] = {}
        for event in events:
            held = latest.get(event.message_id)
            if held is None or event.id > held.id:
                latest[event.message_id] = event
        return sorted(latest.values(), key=lambda event: event.id)


latest_record_selector = LatestRecordSelector()
