from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from jobtrack.api.deps import get_service_registry
from jobtrack.api.main import create_app
from jobtrack.core.exceptions import DuplicateServiceError, ValidationError


@pytest.fixture
def client():
    app = create_app()
    return TestClient(app)


@pytest.fixture
def mock_registry(client):
    registry = AsyncMock()
    client.app.dependency_overrides[get_service_registry] = lambda: registry
    return registry


def make_service(id=1, name="fetch", description=None):
    return SimpleNamespace(
        id=id,
        name=name,
        description=description,
        created_at=datetime.now(timezone.utc),
    )


def test_register_service(client, mock_registry):
    mock_registry.register_service.return_value = make_service(description="Download sources")

    response = client.post(
        "/api/v1/services", json={"name": "fetch", "description": "Download sources"}
    )

    assert response.status_code == 201
    assert response.json() == {"id": 1, "name": "fetch", "description": "Download sources"}
    mock_registry.register_service.assert_called_once_with("fetch", "Download sources")
    mock_registry.db.commit.assert_awaited_once()


def test_register_service_duplicate(client, mock_registry):
    mock_registry.register_service.side_effect = DuplicateServiceError("fetch")

    response = client.post("/api/v1/services", json={"name": "fetch"})

    assert response.status_code == 409
    assert "already registered" in response.json()["detail"]
    mock_registry.db.commit.assert_not_called()


def test_register_service_blank_name(client, mock_registry):
    mock_registry.register_service.side_effect = ValidationError("name is required", field="name")

    response = client.post("/api/v1/services", json={"name": "   "})

    assert response.status_code == 422


def test_register_service_missing_name(client, mock_registry):
    response = client.post("/api/v1/services", json={})

    assert response.status_code == 422
    mock_registry.register_service.assert_not_called()


def test_list_services(client, mock_registry):
    mock_registry.list_services.return_value = [make_service(1, "fetch"), make_service(2, "build")]

    response = client.get("/api/v1/services", params={"limit": 2, "offset": 1})

    assert response.status_code == 200
    assert [s["name"] for s in response.json()] == ["fetch", "build"]
    mock_registry.list_services.assert_called_once_with(limit=2, offset=1)


def test_list_services_rejects_negative_offset(client, mock_registry):
    response = client.get("/api/v1/services", params={"offset": -1})

    assert response.status_code == 422
