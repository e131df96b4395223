from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from vetrecords.api.routes.stats import today
from vetrecords.core.config import Settings
from vetrecords.main import create_app


@pytest.fixture
def settings():
    """ Fresh in-memory database for every test. """
    return Settings(database_url="sqlite://", log_level="WARNING")


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def pet_data():
    return {
        "name": "Biscuit",
        "animal_type": "Dog",
        "owner_name": "Jordan Lee",
        "date_of_birth": "2019-04-12",
    }


@pytest.fixture
def pet(client, pet_data):
    response = client.post("/api/pets", json=pet_data)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def make_pet(client, pet_data):
    def _make(**overrides):
        response = client.post("/api/pets", json={**pet_data, **overrides})
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_record(client):
    def _make(pet_id, **body):
        response = client.post(f"/api/pets/{pet_id}/records", json=body)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def due_in():
    """ ISO date `days` away from the date the stats window is computed from. """
    def _due_in(days):
        return (today() + timedelta(days=days)).isoformat()
    return _due_in
