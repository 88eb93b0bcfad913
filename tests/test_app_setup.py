"""Tests for application setup."""

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from goal_tracker.main import app as default_app
from goal_tracker.main import create_app
from goal_tracker.services.goal_store import InMemoryGoalStore


class UnreachableStore(InMemoryGoalStore):
    """Store whose backend never answers."""

    async def ping(self) -> bool:
        return False


@pytest.fixture
def sync_client(app):
    return TestClient(app)


def test_app_creation():
    assert default_app is not None
    assert default_app.title == "Goal Tracker API"


def test_root_endpoint(sync_client):
    response = sync_client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Goal Tracker API"
    assert "version" in data


def test_lifespan_keeps_injected_store(app, store):
    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
    assert app.state.goal_store is store


@pytest.mark.asyncio
async def test_health_endpoint(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "db": "connected"}


@pytest.mark.asyncio
async def test_health_endpoint_unhealthy(settings):
    app = create_app(settings=settings, store=UnreachableStore())

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


@pytest.mark.asyncio
async def test_missing_store_is_storage_error(settings):
    app = create_app(settings=settings)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/api/")

    assert response.status_code == 500
    assert response.json()["code"] == "STORAGE_ERROR"


def test_unknown_route_uses_error_body(sync_client):
    response = sync_client.get("/no/such/route")
    assert response.status_code == 404
    assert response.json()["code"] == "HTTP_ERROR"


def test_cors_headers(sync_client):
    response = sync_client.options(
        "/",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert response.status_code in [200, 204]


def test_security_headers(sync_client):
    response = sync_client.get("/")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "X-XSS-Protection" in response.headers
    assert "Strict-Transport-Security" not in response.headers


def test_hsts_in_production(settings, store):
    settings.ENVIRONMENT = "production"
    client = TestClient(create_app(settings=settings, store=store))

    response = client.get("/")
    assert "Strict-Transport-Security" in response.headers


def test_process_time_header(sync_client):
    response = sync_client.get("/")
    assert "X-Process-Time" in response.headers


def test_metrics_endpoint(sync_client):
    sync_client.get("/")
    response = sync_client.get("/metrics/")
    assert response.status_code == 200
    assert "http_requests_total" in response.text


def test_openapi_schema(sync_client):
    response = sync_client.get("/openapi.json")
    assert response.status_code == 200
    schema = response.json()
    assert schema["info"]["title"] == "Goal Tracker API"
    assert "/create_goal" in schema["paths"]
    assert "/api/goal/details/{goal_id}" in schema["paths"]
