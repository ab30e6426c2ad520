"""Readiness probe and request-id propagation."""
import pytest
from fastapi.testclient import TestClient

from flowspeak.services.progress_service import get_progress_service


@pytest.fixture()
def client(build_service):
    from flowspeak.main import app

    service = build_service()
    app.dependency_overrides[get_progress_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health_endpoint_returns_ok(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_request_id_minted_per_request(client) -> None:
    first = client.get("/today")
    second = client.get("/today")

    assert first.headers["X-Request-Id"]
    assert first.json()["requestId"] == first.headers["X-Request-Id"]
    assert first.headers["X-Request-Id"] != second.headers["X-Request-Id"]


def test_caller_request_id_reaches_payload(client) -> None:
    req_id = "speech-session-42"
    response = client.post("/mood", json={"mood": "okay"}, headers={"X-Request-Id": req_id})

    assert response.headers["X-Request-Id"] == req_id
    assert response.json()["requestId"] == req_id


def test_oversized_request_id_is_replaced(client) -> None:
    response = client.get("/health", headers={"X-Request-Id": "x" * 200})

    assert response.headers["X-Request-Id"] != "x" * 200
