from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from jobtracker.database import Base, engine  # noqa: E402
from jobtracker.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_state():
    Base.metadata.create_all(bind=engine)
    app.state.general_limiter.reset()
    app.state.auth_limiter.reset()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def register_user(client):
    def _register(username: str, email: str | None = None, password: str = "secret123") -> dict:
        response = client.post(
            "/api/auth/register",
            json={"username": username, "email": email or f"{username}@example.com", "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        body["headers"] = {"Authorization": f"Bearer {body['token']}"}
        return body

    return _register


@pytest.fixture
def create_job(client):
    def _create(headers: dict, **fields) -> dict:
        payload = {"company_name": "Acme", "job_title": "Engineer"}
        payload.update(fields)
        response = client.post("/api/jobs", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
