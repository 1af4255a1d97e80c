from sqlalchemy import create_engine, inspect, text

from jobtracker.bootstrap import run_runtime_migrations
from jobtracker.config import settings


def test_health_reports_ok_with_timestamp(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert "T" in body["timestamp"]


def test_health_reports_configured_environment(client, monkeypatch):
    monkeypatch.setattr(settings, "environment", "staging")
    assert client.get("/health").json()["environment"] == "staging"


def test_responses_carry_security_headers(client):
    response = client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert "default-src 'self'" in response.headers["Content-Security-Policy"]


def test_unknown_routes_use_error_envelope(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert "error" in response.json()


def test_malformed_json_is_a_bad_request(client, register_user):
    headers = register_user("alice")["headers"]
    response = client.post(
        "/api/jobs",
        content="{not json",
        headers={**headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_oversized_bodies_are_rejected(client, register_user, monkeypatch):
    headers = register_user("alice")["headers"]
    monkeypatch.setattr(settings, "max_body_bytes", 64)
    response = client.post(
        "/api/jobs",
        json={"company_name": "Acme", "job_title": "Engineer", "notes": "x" * 200},
        headers=headers,
    )
    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large"}


def test_large_listings_are_compressed(client, register_user, create_job):
    headers = register_user("alice")["headers"]
    for i in range(5):
        create_job(headers, company_name=f"Company {i}", description="d" * 300)
    response = client.get("/api/jobs", headers={**headers, "Accept-Encoding": "gzip"})
    assert response.status_code == 200
    assert response.headers.get("Content-Encoding") == "gzip"
    assert response.json()["pagination"]["total"] == 5


def test_runtime_migrations_add_owner_column_to_legacy_table():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE job_applications ("
                "id INTEGER PRIMARY KEY, company_name VARCHAR(255) NOT NULL, "
                "job_title VARCHAR(255) NOT NULL, status VARCHAR(50))"
            )
        )

    run_runtime_migrations(engine)

    inspector = inspect(engine)
    columns = {column["name"] for column in inspector.get_columns("job_applications")}
    assert "user_id" in columns
    assert inspector.has_table("users")
    index_names = {index["name"] for index in inspector.get_indexes("job_applications")}
    assert {"ix_job_applications_user_id", "idx_job_applications_status"} <= index_names


def test_runtime_migrations_are_idempotent():
    engine = create_engine("sqlite://")
    run_runtime_migrations(engine)
    run_runtime_migrations(engine)
    assert {"users", "job_applications"} <= set(inspect(engine).get_table_names())
