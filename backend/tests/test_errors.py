import logging

from sqlalchemy import text

from vetrecords.core.config import Settings
from vetrecords.main import create_app


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_non_object_body_is_bad_request(client):
    response = client.post("/api/pets", json=["not", "an", "object"])
    assert response.status_code == 400
    assert "error" in response.json()


def test_store_error_surfaces_message(client):
    with client.app.state.engine.begin() as conn:
        conn.execute(text("DROP TABLE medical_records"))

    response = client.get("/api/stats")
    assert response.status_code == 500
    assert "no such table: medical_records" in response.json()["error"]


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_malformed_json_names_body(client):
    response = client.post(
        "/api/pets",
        content='{"name": "Rex",',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid body:")


def test_log_level_follows_settings():
    root = logging.getLogger()
    previous = root.level
    try:
        create_app(Settings(database_url="sqlite://", log_level="ERROR"))
        assert root.level == logging.ERROR
        create_app(Settings(database_url="sqlite://", log_level="debug"))
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)
