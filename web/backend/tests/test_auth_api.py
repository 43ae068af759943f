"""Tests for admin login and token verification."""

from datetime import datetime, timedelta, timezone

import pytest

from nowplaying.domain.auth import issue_token

ADMIN_PASSWORD = "hunter2"


def test_login_success(client):
    response = client.post(
        "/api/admin/login", json={"username": "admin", "password": ADMIN_PASSWORD}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"] == {"username": "admin", "role": "admin"}
    assert body["token"].count(".") == 2


def test_login_token_opens_admin_endpoints(client):
    token = client.post(
        "/api/admin/login", json={"username": "admin", "password": ADMIN_PASSWORD}
    ).json()["token"]

    response = client.get(
        "/api/admin/songs", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 200


@pytest.mark.parametrize(
    "payload",
    [{}, {"username": "admin"}, {"password": ADMIN_PASSWORD}, {"username": "", "password": ""}],
)
def test_login_missing_fields(client, payload):
    response = client.post("/api/admin/login", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Username and password are required"


@pytest.mark.parametrize(
    "username,password", [("admin", "wrong"), ("root", ADMIN_PASSWORD)]
)
def test_login_invalid_credentials(client, caplog, username, password):
    response = client.post(
        "/api/admin/login", json={"username": username, "password": password}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"
    assert "Failed admin login" in caplog.text


def test_verify_valid(client, auth_headers):
    response = client.get("/api/admin/verify", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "message": "Token valid",
        "user": {"username": "admin", "role": "admin"},
    }


def test_verify_missing(client):
    response = client.get("/api/admin/verify")

    assert response.status_code == 401
    assert response.json()["detail"] == "No token provided"


def test_verify_expired(client, test_config):
    token = issue_token(
        "admin",
        test_config.auth,
        now=datetime.now(timezone.utc) - timedelta(hours=25),
    )

    response = client.get(
        "/api/admin/verify", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Token expired"


def test_verify_invalid(client):
    response = client.get(
        "/api/admin/verify", headers={"Authorization": "Bearer not.a.token"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"
