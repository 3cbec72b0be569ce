import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.complaint_intake import get_intake_service

from conftest import OUTSIDE, PANCHVATI, image_data_url


@pytest.fixture
def service(make_intake):
    return make_intake()


@pytest.fixture
def client(service):
    app.dependency_overrides[get_intake_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def payload(**overrides):
    body = {
        "user_id": "USR-web",
        "category": "Water",
        "description": "Major pipe burst flooding the street",
        "photo_url": image_data_url(b"route-photo"),
        "latitude": PANCHVATI[0],
        "longitude": PANCHVATI[1],
    }
    body.update(overrides)
    return body


def test_root(client):
    body = client.get("/").json()
    assert body["status"] == "running"
    assert body["complaints"] == "/complaints"


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_health_db_uses_mock(client):
    response = client.get("/health/db")
    assert response.status_code == 200
    assert response.json()["database"] == "mock"


def test_create_and_read_back(client, mailer):
    response = client.post("/complaints", json=payload())
    assert response.status_code == 201

    created = response.json()
    assert created["priority"] == "High"
    assert created["status"] == "In Progress"
    assert created["worker_name"] == "Suresh Jadhav"
    assert created["ward"] == "Amravati Ward – Panchvati Zone"

    # background task runs before TestClient returns
    assert [m["to"] for m in mailer.sent] == ["suresh.jadhav@civicpulse.example"]

    fetched = client.get(f"/complaints/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["id"] == created["id"]
    assert fetched.json()["division"] == "Zone-3"


def test_unassigned_complaint(client):
    created = client.post("/complaints", json=payload(latitude=OUTSIDE[0], longitude=OUTSIDE[1])).json()
    assert created["status"] == "Submitted"
    assert created["worker_name"] is None
    assert created["division"] == "Zone-Unmapped"


def test_spam_rejection(client):
    response = client.post("/complaints", json=payload(category="Garbage", description="test test test"))
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["code"] == "SPAM"
    assert detail["error"] == "Upload flagged as spam. Please provide a valid civic issue report."


def test_duplicate_conflict(client):
    first = client.post("/complaints", json=payload())
    assert first.status_code == 201

    second = client.post("/complaints", json=payload(user_id="USR-other", description="Water gushing out of a broken main"))
    assert second.status_code == 409
    assert second.json()["detail"]["duplicate_against"] == {"id": first.json()["id"], "status": "In Progress"}


def test_missing_fields_are_validation_errors(client):
    body = payload()
    del body["latitude"]
    del body["description"]
    response = client.post("/complaints", json=body)
    assert response.status_code == 422
    missing = {tuple(error["loc"]) for error in response.json()["detail"]}
    assert ("body", "latitude") in missing
    assert ("body", "description") in missing


def test_blank_description_is_validation_error(client):
    assert client.post("/complaints", json=payload(description="   ")).status_code == 422


def test_store_failure_is_500(client, store, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("firestore unavailable")

    monkeypatch.setattr(store, "insert_complaint", broken)
    response = client.post("/complaints", json=payload())
    assert response.status_code == 500
    assert response.json()["detail"] == {"error": "Failed to create complaint"}


def test_unknown_complaint_is_404(client):
    assert client.get("/complaints/CMP-missing").status_code == 404


def test_officers(client):
    officers = client.get("/officers").json()
    assert [o["id"] for o in officers] == ["OFF-001", "OFF-002", "OFF-003", "OFF-004"]


def test_long_category_is_not_a_validation_error(client):
    response = client.post("/complaints", json=payload(
        category="Stray cattle blocking the lane outside the vegetable market every morning",
        description="Loud music every night near the square",
    ))
    assert response.status_code == 201
    assert response.json()["category"] == "Other"
