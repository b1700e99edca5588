"""
Test suite for RouteServiceResolver and ServiceCatalog.

Tests ordering of pending/completed/route services, sub-step filtering,
and entity resolution with unregistered names dropped.

System role: Verification of execution timeline views
"""

from types import SimpleNamespace

import pytest

from jobtrack.core.exceptions import ServiceLookupUnavailable
from jobtrack.core.route_services import RouteServiceResolver, ServiceCatalog


@pytest.fixture
def catalog() -> ServiceCatalog:
    """Provide catalog with two registered services."""
    return ServiceCatalog(
        [SimpleNamespace(name="svc1"), SimpleNamespace(name="deploy")]
    )


@pytest.fixture
def job(job_event_factory, payload_factory):
    """Provide snapshot with completions, sub-steps, and a remaining route."""
    return job_event_factory(
        payload=payload_factory(
            complete=["svc1", "svc2:sub", "build"],
            route=["test", "deploy"],
        )
    )


class TestServiceNames:
    """Test suite for name-only service views."""

    def test_completed_services_should_drop_sub_step_markers(
        self, job_event_factory, payload_factory
    ) -> None:
        """Test completed services exclude entries containing ':'."""
        job = job_event_factory(payload=payload_factory(complete=["svc1", "svc2:sub"]))

        assert RouteServiceResolver().completed_services(job) == ["svc1"]

    def test_pending_services_should_be_route_as_is(
        self, job_event_factory, payload_factory
    ) -> None:
        """Test pending services are the route, unfiltered and in order."""
        route = ["z", "a:odd", "z", "m"]
        job = job_event_factory(payload=payload_factory(route=route))

        assert RouteServiceResolver().pending_services(job) == route

    def test_route_services_should_list_completed_before_pending(self, job) -> None:
        """Test route is completions in order followed by pending."""
        assert RouteServiceResolver().route_services(job) == [
            "svc1",
            "build",
            "test",
            "deploy",
        ]

    def test_services_should_be_empty_for_empty_payload(self, job_event_factory) -> None:
        """Test absent fields produce empty lists, not errors."""
        resolver = RouteServiceResolver()
        job = job_event_factory(payload={})

        assert resolver.pending_services(job) == []
        assert resolver.completed_services(job) == []
        assert resolver.route_services(job) == []


class TestEntityResolution:
    """Test suite for resolve_entities=True."""

    def test_route_services_should_drop_unregistered_names(self, job, catalog) -> None:
        """Test unresolved names are silently excluded."""
        resolved = RouteServiceResolver(catalog).route_services(job, resolve_entities=True)

        assert [service.name for service in resolved] == ["svc1", "deploy"]

    def test_pending_services_should_resolve_in_route_order(self, job, catalog) -> None:
        """Test pending resolution keeps route order."""
        resolved = RouteServiceResolver(catalog).pending_services(job, resolve_entities=True)

        assert [service.name for service in resolved] == ["deploy"]

    def test_completed_services_should_resolve_registered_names(self, job, catalog) -> None:
        """Test completed resolution returns catalog entities."""
        resolved = RouteServiceResolver(catalog).completed_services(job, resolve_entities=True)

        assert resolved == [catalog.find_by_name("svc1")]

    def test_resolution_without_lookup_should_raise(self, job) -> None:
        """Test resolution requires a configured lookup."""
        with pytest.raises(ServiceLookupUnavailable):
            RouteServiceResolver().route_services(job, resolve_entities=True)


class TestServiceCatalog:
    """Test suite for ServiceCatalog."""

    def test_find_by_name_should_return_none_for_unknown(self, catalog) -> None:
        """Test unknown names resolve to None."""
        assert catalog.find_by_name("missing") is None
        assert len(catalog) == 2
