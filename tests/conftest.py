import pytest
from fastapi.testclient import TestClient

from camp_registration_api.app.core.config import settings
from camp_registration_api.app.core.db import init_db
from camp_registration_api.app.main import app


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the application at a fresh SQLite file."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "camp.db"))
    init_db()
    return settings.database_url


@pytest.fixture
def client(database):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def camp(client):
    response = client.post(
        "/api/v1/camps/",
        json={
            "title": "Summer Camp 2025",
            "theme": "Faith and Fire",
            "year": 2025,
            "fee": 15000,
            "premium_fees": [20000, 30000],
            "start_date": "2025-08-01T00:00:00Z",
            "end_date": "2025-08-07T00:00:00Z",
        },
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def district(client):
    response = client.post("/api/v1/districts/", json={"name": "Yaba", "zones": ["Zone A"]})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def register(client, camp):
    """Return a helper that registers a campite for ``camp``."""

    def _register(**overrides):
        payload = {
            "firstname": "John",
            "lastname": "Doe",
            "phone": "08012345678",
            "age_group": "21-30",
            "gender": "male",
            "camp_id": camp["id"],
        }
        payload.update(overrides)
        response = client.post("/api/v1/campites/", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _register
