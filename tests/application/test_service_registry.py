"""
Test suite for ServiceRegistryService against an in-memory SQLite database.

System role: Verification of service registration use cases
"""

import pytest

from jobtrack.application.services.service_registry import ServiceRegistryService
from jobtrack.core.exceptions import DuplicateServiceError, ValidationError


@pytest.fixture
def registry(test_async_db) -> ServiceRegistryService:
    """Provide ServiceRegistryService bound to the test session."""
    return ServiceRegistryService(db=test_async_db)


class TestRegisterService:
    """Test suite for ServiceRegistryService.register_service()."""

    async def test_register_service_should_store_service(self, registry) -> None:
        """Test a new name is stored with its description."""
        service = await registry.register_service("fetch", "Download sources")

        assert service.id is not None
        assert service.description == "Download sources"

    async def test_register_service_should_reject_duplicates(self, registry) -> None:
        """Test a taken name raises DuplicateServiceError."""
        await registry.register_service("fetch")

        with pytest.raises(DuplicateServiceError):
            await registry.register_service("fetch")

    @pytest.mark.parametrize("name", ["", "   "])
    async def test_register_service_should_reject_blank_names(self, registry, name) -> None:
        """Test blank names raise ValidationError."""
        with pytest.raises(ValidationError):
            await registry.register_service(name)


class TestListServices:
    """Test suite for ServiceRegistryService.list_services()."""

    async def test_list_services_should_page_in_registration_order(self, registry) -> None:
        """Test pagination follows registration order."""
        for name in ["fetch", "build", "package"]:
            await registry.register_service(name)

        assert [s.name for s in await registry.list_services()] == ["fetch", "build", "package"]
        assert [s.name for s in await registry.list_services(limit=1, offset=1)] == ["build"]
