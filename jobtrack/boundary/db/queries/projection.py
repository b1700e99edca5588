"""
Projection queries over job payloads.

Exposes fields nested inside the JSON payload as flat pseudo-columns that
can be selected and filtered without schema changes:

  - collections: a JSON array exploded into one row per element through a
    lateral join, then aggregated back per job into a comma-joined string
    that keeps payload array order.
  - scalars: a single value extracted through a JSON path.

The result is restricted to current snapshots unless the caller supplies
another id restriction.

Dependencies: sqlalchemy, jobtrack.boundary.db.models, jobtrack.core.exceptions
System role: Ad-hoc reporting and filtering over payload fields
"""

import logging
from typing import Any, Iterable, Mapping, Sequence

from sqlalchemy import ColumnElement, FromClause, Select, func, literal, literal_column, select, true
from sqlalchemy.dialects.postgresql import aggregate_order_by

from jobtrack.boundary.db.models.job_event_model import JobEventModel
from jobtrack.boundary.db.queries.latest import (
    AccountFilter,
    account_id_list,
    latest_record_selector,
)
from jobtrack.core.exceptions import InvalidQuerySpec

logger = logging.getLogger(__name__)

JsonPath = Sequence[str | int]

ROUTER_PATH: JsonPath = ("data", "router", "route")
COMPLETE_PATH: JsonPath = ("complete",)

SUPPORTED_DIALECTS = ("postgresql", "sqlite")


def sqlite_json_path(path: JsonPath) -> str:
    """
    Render a path as an SQLite JSON path string.

    Args:
        path: Keys and array indexes

    Returns:
        str: Path such as $."data"."router"."route"
    """
    rendered = "$"
    for part in path:
        if isinstance(part, int):
            rendered += f"[{part}]"
        else:
            escaped = part.replace('"', '\\"')
            rendered += f'."{escaped}"'
    return rendered


class ProjectionQueryBuilder:
    """
    Builder for payload projections.

    Array expansion has no portable SQL form, so the builder is bound to a
    dialect name. Scalar extraction uses SQLAlchemy's JSON path operators
    and works anywhere JSON is supported.

    Attributes:
        dialect_name: Target dialect ("postgresql" or "sqlite")
    """

    def __init__(self, dialect_name: str = "postgresql") -> None:
        """
        Initialize builder.

        Args:
            dialect_name: SQLAlchemy dialect name of the target database
        """
        self.dialect_name = dialect_name

    def build(
        self,
        collections: Mapping[str, JsonPath] | None = None,
        scalars: Mapping[str, JsonPath] | None = None,
        account_ids: AccountFilter = None,
        id_restrictor: Select | Iterable[int] | None = None,
    ) -> Select:
        """
        Compose a projection over job events.

        Args:
            collections: {alias: path} of a payload array; at most one entry
            scalars: {alias: path} of payload scalars
            account_ids: Single account id or iterable restricting base rows
            id_restrictor: Ids (or a Select of ids) replacing the
                current-snapshot restriction

        Returns:
            Select: Rows of the derived relation: every jobs column plus one
                column per alias

        Raises:
            InvalidQuerySpec: More than one collection, bad alias or path,
                or collections on an unsupported dialect
        """
        collections = dict(collections or {})
        scalars = dict(scalars or {})
        self._validate(collections, scalars)

        jobs = JobEventModel.__table__
        columns: list[ColumnElement[Any]] = list(jobs.c)
        from_clause: FromClause = jobs

        for alias, path in collections.items():
            elements = self._explode(jobs.c.payload, path, alias)
            from_clause = from_clause.outerjoin(elements, true())
            columns.append(self._aggregate(elements).label(alias))

        for alias, path in scalars.items():
            columns.append(jobs.c.payload[tuple(path)].as_string().label(alias))

        accounts = account_id_list(account_ids)
        if id_restrictor is None:
            id_restrictor = latest_record_selector.current_ids(accounts)

        inner = select(*columns).select_from(from_clause).where(jobs.c.id.in_(id_restrictor))
        if accounts is not None:
            inner = inner.where(jobs.c.account_id.in_(accounts))
        if collections:
            inner = inner.group_by(jobs.c.id)

        logger.debug(
            "Composed job projection",
            extra={"collections": sorted(collections), "scalars": sorted(scalars)},
        )
        return select(inner.subquery("job_projection"))

    def with_router(self, **kwargs: Any) -> Select:
        """Projection exposing the planned route as the `router` column."""
        return self.build(collections={"router": ROUTER_PATH}, **kwargs)

    def with_complete(self, **kwargs: Any) -> Select:
        """Projection exposing completion markers as the `complete` column."""
        return self.build(collections={"complete": COMPLETE_PATH}, **kwargs)

    def _validate(self, collections: dict[str, JsonPath], scalars: dict[str, JsonPath]) -> None:
        if len(collections) > 1:
            raise InvalidQuerySpec(
                "Only one collection may be projected per query",
                details={"collections": sorted(collections)},
            )
        if collections and self.dialect_name not in SUPPORTED_DIALECTS:
            raise InvalidQuerySpec(
                f"Collection projections are not supported on {self.dialect_name}",
                details={"supported": list(SUPPORTED_DIALECTS)},
            )

        base_columns = set(JobEventModel.__table__.c.keys())
        overlap = set(collections) & set(scalars)
        if overlap:
            raise InvalidQuerySpec(
                "Alias used for both a collection and a scalar",
                alias=sorted(overlap)[0],
            )
        for alias, path in {**collections, **scalars}.items():
            if not alias.isidentifier():
                raise InvalidQuerySpec("Alias must be a valid identifier", alias=alias)
            if alias in base_columns:
                raise InvalidQuerySpec("Alias shadows a job column", alias=alias)
            if isinstance(path, str) or not path:
                raise InvalidQuerySpec("Path must be a non-empty sequence of keys", alias=alias)

    def _explode(self, payload: ColumnElement[Any], path: JsonPath, alias: str) -> FromClause:
        name = f"{alias}_elements"
        if self.dialect_name == "postgresql":
            return (
                func.json_array_elements_text(payload[tuple(path)])
                .table_valued("value", with_ordinality="ordinality")
                .lateral(name)
            )
        return func.json_each(payload, literal(sqlite_json_path(path))).table_valued("key", "value").alias(name)

    def _aggregate(self, elements: FromClause) -> ColumnElement[Any]:
        if self.dialect_name == "postgresql":
            return func.string_agg(
                elements.c.value,
                aggregate_order_by(literal_column("','"), elements.c.ordinality),
            )
        # json_each yields array elements in index order
        return func.group_concat(elements.c.value, ",")
