"""
Shared fixtures: a fresh app per test backed by a temp-file SQLite database
and a temp upload directory.
"""

from __future__ import annotations

import itertools

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from main import create_app

TEST_PASSWORD = "password123"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=str(tmp_path / "trackside-test.db"),
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        upload_dir=str(tmp_path / "uploads"),
        data_dir=str(tmp_path / "data"),
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def run_sql(client):
    """
    Execute a statement on the app's database from a sync test.
    """

    def _run(sql: str, *args):
        return client.portal.call(client.app.state.db.execute, sql, *args)

    return _run


@pytest.fixture
def make_user(client):
    counter = itertools.count(1)

    def _make(name: str = "Test Driver", email: str | None = None) -> dict:
        email = email or f"driver{next(counter)}@example.com"
        response = client.post(
            "/api/register",
            json={
                "name": name,
                "email": email,
                "password": TEST_PASSWORD,
                "confirmPassword": TEST_PASSWORD,
            },
        )
        assert response.status_code == 201, response.text

        login = client.post("/api/auth/login", json={"email": email, "password": TEST_PASSWORD})
        assert login.status_code == 200, login.text
        token = login.json()["token"]
        return {
            "id": response.json()["id"],
            "name": name,
            "email": email,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _make


@pytest.fixture
def make_track(client):
    counter = itertools.count(1)

    def _make(user: dict, **overrides) -> dict:
        n = next(counter)
        body = {
            "name": f"Test Raceway {n}",
            "location": "Somewhere, CA",
            "description": "A fast, flowing circuit",
            "eventTypes": ["ROADCOURSE", "AUTOCROSS"],
        }
        body.update(overrides)
        response = client.post("/api/tracks", json=body, headers=user["headers"])
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_car(client):
    def _make(user: dict, **overrides) -> dict:
        body = {"make": "Mazda", "model": "MX-5", "year": 2020}
        body.update(overrides)
        response = client.post("/api/cars", json=body, headers=user["headers"])
        assert response.status_code == 201, response.text
        return response.json()

    return _make
