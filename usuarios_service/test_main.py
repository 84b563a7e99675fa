"""
Unit tests for Usuarios Service.
Tests the directory listing, wire format and observability endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from shared.store import InMemoryRecordStore
from usuarios_service.main import app, get_store, settings
from usuarios_service.models import User

USUARIOS_PATH = f"{settings.usuarios_api_prefix}/usuarios"


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_overrides():
    """Drop any dependency override installed by a test."""
    yield
    app.dependency_overrides.clear()


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check(self, client):
        """Test that health endpoint returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "usuarios-service"


class TestMetricsEndpoint:
    """Tests for the Prometheus metrics endpoint."""

    def test_metrics_endpoint(self, client):
        """Test that metrics endpoint returns Prometheus format."""
        client.get(USUARIOS_PATH)
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert b"http_requests_total" in response.content


class TestGetUsers:
    """Tests for GET /usuarios endpoint."""

    def test_get_all_users(self, client):
        """Test fetching all users returns the seed list in order."""
        response = client.get(USUARIOS_PATH)
        assert response.status_code == 200
        assert response.json() == [
            {"id": 1, "nombre": "Ana"},
            {"id": 2, "nombre": "Luis"},
        ]

    def test_users_serialized_with_wire_names(self, client):
        """Test that the name is exposed as 'nombre', not 'name'."""
        data = client.get(USUARIOS_PATH).json()
        for user in data:
            assert set(user) == {"id", "nombre"}

    def test_get_users_from_injected_store(self, client):
        """Test that the endpoint reads from the injected record store."""
        store = InMemoryRecordStore(users=[User(id=7, name="Marta"), User(id=3, name="Pedro")])
        app.dependency_overrides[get_store] = lambda: store
        response = client.get(USUARIOS_PATH)
        assert response.status_code == 200
        assert response.json() == [
            {"id": 7, "nombre": "Marta"},
            {"id": 3, "nombre": "Pedro"},
        ]

    def test_get_users_empty_store(self, client):
        """Test that an empty directory is still a successful empty list."""
        app.dependency_overrides[get_store] = lambda: InMemoryRecordStore()
        response = client.get(USUARIOS_PATH)
        assert response.status_code == 200
        assert response.json() == []


class TestCorrelationId:
    """Tests for correlation ID (trace-id) propagation."""

    def test_trace_id_propagation(self, client):
        """Test that provided X-Trace-ID is propagated in response."""
        trace_id = "test-trace-id-12345"
        response = client.get(USUARIOS_PATH, headers={"X-Trace-ID": trace_id})
        assert response.status_code == 200
        assert response.headers.get("X-Trace-ID") == trace_id

    def test_trace_id_generated_when_not_provided(self, client):
        """Test that X-Trace-ID is generated when not provided."""
        response = client.get(USUARIOS_PATH)
        assert response.status_code == 200
        trace_id = response.headers.get("X-Trace-ID")
        assert len(trace_id) == 36  # UUID format
