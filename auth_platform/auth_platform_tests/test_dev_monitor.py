"""
Unit tests for dev monitor endpoint.
"""
import pytest
from fastapi.testclient import TestClient

from auth_platform.auth_service.config import Settings
from auth_platform.auth_service.main import create_app


@pytest.fixture
def dev_client():
    with TestClient(create_app(Settings(DEV_MODE=True))) as c:
        yield c


@pytest.fixture
def prod_client():
    with TestClient(create_app(Settings(DEV_MODE=False))) as c:
        yield c


@pytest.fixture
def dev_client_with_events(dev_client):
    """Generate one event of every kind through the public endpoints."""
    dev_client.post("/auth/sign-up", json={"identity": "alice", "credential": "pw1"})
    dev_client.post("/auth/sign-up", json={"identity": "alice", "credential": "pw1"})
    token = dev_client.post("/auth/sign-in", json={"identity": "alice", "credential": "pw1"}).json()["token"]
    dev_client.post("/auth/sign-in", json={"identity": "alice", "credential": "wrong"})
    dev_client.post("/auth/sign-out", json={"token": token})
    dev_client.post("/auth/sign-out", json={"token": token})
    return dev_client


def test_event_logs_hidden_without_dev_mode(prod_client):
    response = prod_client.get("/dev/event-logs")
    assert response.status_code == 404
    assert response.json()["detail"] == "Not found"


def test_event_logs_returns_events_newest_first(dev_client_with_events):
    response = dev_client_with_events.get("/dev/event-logs")
    assert response.status_code == 200

    events = response.json()
    assert [e["event_type"] for e in events] == [
        "sign_out_failure",
        "sign_out_success",
        "sign_in_failure",
        "sign_in_success",
        "sign_up_failure",
        "sign_up_success",
    ]
    for event in events:
        assert "id" in event
        assert "timestamp" in event
        assert "metadata" in event


def test_event_logs_filter_by_type(dev_client_with_events):
    response = dev_client_with_events.get("/dev/event-logs", params={"event_type": "sign_in_failure"})
    assert response.status_code == 200

    events = response.json()
    assert len(events) == 1
    assert events[0]["identity"] == "alice"
    assert events[0]["metadata"] == {"reason": "bad_credential"}


def test_event_logs_limit(dev_client_with_events):
    response = dev_client_with_events.get("/dev/event-logs", params={"limit": 2})
    assert response.status_code == 200
    assert len(response.json()) == 2


def test_event_logs_limit_exceeds_max(dev_client):
    response = dev_client.get("/dev/event-logs", params={"limit": 1001})
    assert response.status_code == 400
    assert "cannot exceed 1000" in response.json()["detail"]


def test_event_logs_limit_must_be_positive(dev_client):
    response = dev_client.get("/dev/event-logs", params={"limit": 0})
    assert response.status_code == 400


def test_event_logs_never_expose_credentials_or_tokens(dev_client):
    dev_client.post("/auth/sign-up", json={"identity": "alice", "credential": "hunter2"})
    token = dev_client.post("/auth/sign-in", json={"identity": "alice", "credential": "hunter2"}).json()["token"]

    body = dev_client.get("/dev/event-logs").text
    assert "hunter2" not in body
    assert token not in body
