"""
Route service resolution.

Maps the route and completion markers of a job snapshot into ordered
pending/completed service lists, optionally resolved to service entities.

Dependencies: jobtrack.core.payload, jobtrack.core.exceptions
System role: Execution timeline view for a job
"""

from typing import Any, Iterable, Protocol, TypeVar

from jobtrack.core.exceptions import ServiceLookupUnavailable
from jobtrack.core.job_status import JobSnapshot, payload_of

ServiceT = TypeVar("ServiceT", covariant=True)


class ServiceLookup(Protocol[ServiceT]):
    """Name to service entity lookup."""

    def find_by_name(self, name: str) -> ServiceT | None:
        ...


class ServiceCatalog:
    """
    In-memory service lookup keyed by name.

    Built from service entities preloaded in a single query so resolving a
    route never issues one query per name.
    """

    def __init__(self, services: Iterable[Any]) -> None:
        """
        Index services by their name attribute.

        Args:
            services: Entities exposing a `name` attribute
        """
        self._by_name = {service.name: service for service in services}

    def find_by_name(self, name: str) -> Any | None:
        """Service registered under name, or None."""
        return self._by_name.get(name)

    def __len__(self) -> int:
        return len(self._by_name)


class RouteServiceResolver:
    """
    Ordered service views over a job snapshot.

    route_services() is completed services (in completion order) followed by
    pending services (in planned order). That is an approximation of the
    execution timeline: only "completed before pending" is guaranteed.
    """

    def __init__(self, lookup: ServiceLookup | None = None) -> None:
        """
        Initialize resolver.

        Args:
            lookup: Entity lookup used when resolve_entities is requested
        """
        self.lookup = lookup

    def pending_services(self, job: JobSnapshot, resolve_entities: bool = False) -> list:
        """Planned remaining services, unfiltered and in route order."""
        names = list(payload_of(job).route)
        return self._resolve(names) if resolve_entities else names

    def completed_services(self, job: JobSnapshot, resolve_entities: bool = False) -> list:
        """Completed services in completion order, without sub-step markers."""
        names = payload_of(job).completed_steps
        return self._resolve(names) if resolve_entities else names

    def route_services(self, job: JobSnapshot, resolve_entities: bool = False) -> list:
        """Completed services followed by pending services."""
        names = self.completed_services(job) + self.pending_services(job)
        return self._resolve(names) if resolve_entities else names

    def _resolve(self, names: list[str]) -> list:
        if self.lookup is None:
            raise ServiceLookupUnavailable(
                "Service entity resolution requested without a service lookup",
                {"services": names},
            )
        # route may reference services that are not registered yet
        resolved = (self.lookup.find_by_name(name) for name in names)
        return [service for service in resolved if service is not None]
