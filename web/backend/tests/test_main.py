"""Tests for FastAPI application."""

import pytest
from fastapi.testclient import TestClient

from web.backend.main import app, cors_origins, create_app

client = TestClient(app)


def test_health_endpoint():
    """Test health check endpoint returns 200."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_cors_headers():
    """Test CORS headers are present."""
    response = client.options(
        "/health",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_admin_routes_registered():
    """Test the queue and auth routes are mounted under /api."""
    paths = {route.path for route in app.routes}
    assert {
        "/api/songs",
        "/api/admin/songs",
        "/api/admin/songs/reorder",
        "/api/admin/login",
        "/api/admin/verify",
    } <= paths


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("", ["http://localhost:3000"]),
        (" , ", ["http://localhost:3000"]),
        ("https://stage.example", ["https://stage.example"]),
        (
            "https://stage.example, https://admin.example,",
            ["https://stage.example", "https://admin.example"],
        ),
    ],
)
def test_cors_origins_parsing(raw, expected):
    assert cors_origins(raw) == expected


def test_allowed_origins_env_override(monkeypatch):
    """Test ALLOWED_ORIGINS replaces the dev default."""
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://stage.example")
    custom = TestClient(create_app())

    allowed = custom.options(
        "/health",
        headers={
            "Origin": "https://stage.example",
            "Access-Control-Request-Method": "GET",
        },
    )
    denied = custom.options(
        "/health",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET",
        },
    )

    assert allowed.headers["access-control-allow-origin"] == "https://stage.example"
    assert "access-control-allow-origin" not in denied.headers
