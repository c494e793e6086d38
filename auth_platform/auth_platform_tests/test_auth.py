from fastapi.testclient import TestClient
import pytest

from auth_platform.auth_service.config import Settings
from auth_platform.auth_service.main import create_app


@pytest.fixture
def client():
    # A fresh app per test: every app instance owns its own stores
    app = create_app(Settings(DEV_MODE=True))
    with TestClient(app) as c:
        yield c


def sign_up(client, identity, credential):
    return client.post("/auth/sign-up", json={"identity": identity, "credential": credential})


def sign_in(client, identity, credential):
    return client.post("/auth/sign-in", json={"identity": identity, "credential": credential})


def sign_out(client, token):
    return client.post("/auth/sign-out", json={"token": token})


def test_sign_up_and_sign_in(client):
    import uuid
    unique = uuid.uuid4().hex[:8]
    identity = f"user_{unique}@example.com"

    register = sign_up(client, identity, "testing12345")
    assert register.status_code == 200
    account_id = register.json()["account_id"]
    assert account_id

    login = sign_in(client, identity, "testing12345")
    assert login.status_code == 200
    assert login.json()["account_id"] == account_id
    assert login.json()["token"]


def test_sign_up_twice_is_already_exists(client):
    first = sign_up(client, "alice", "pw1")
    assert first.status_code == 200

    second = sign_up(client, "alice", "another-password")
    assert second.status_code == 409
    assert second.json() == {"error": "AlreadyExists", "detail": "Account already exists"}

    # The failed attempt must not have replaced the stored credential
    assert sign_in(client, "alice", "pw1").status_code == 200
    assert sign_in(client, "alice", "another-password").status_code == 401


def test_sign_up_does_not_create_session(client):
    sign_up(client, "alice", "pw1")
    health = client.get("/health").json()
    assert health["accounts"] == 1
    assert health["active_sessions"] == 0


def test_alice_session_lifecycle(client):
    assert sign_up(client, "alice", "pw1").status_code == 200

    login = sign_in(client, "alice", "pw1")
    assert login.status_code == 200
    token = login.json()["token"]

    first = sign_out(client, token)
    assert first.status_code == 200
    assert first.json() == {}

    second = sign_out(client, token)
    assert second.status_code == 404
    assert second.json() == {"error": "NoSuchSession", "detail": "No such session"}


def test_invalid_credentials_do_not_reveal_account_existence(client):
    sign_up(client, "alice", "pw1")

    wrong_password = sign_in(client, "alice", "wrongpw")
    unknown_identity = sign_in(client, "nobody", "x")

    assert wrong_password.status_code == unknown_identity.status_code == 401
    assert wrong_password.json() == unknown_identity.json()
    assert wrong_password.json() == {"error": "InvalidCredentials", "detail": "Invalid credentials"}


def test_each_sign_in_issues_a_new_token(client):
    sign_up(client, "alice", "pw1")

    tokens = {sign_in(client, "alice", "pw1").json()["token"] for _ in range(5)}
    assert len(tokens) == 5
    assert client.get("/health").json()["active_sessions"] == 5


def test_multiple_sessions_are_independent(client):
    sign_up(client, "alice", "pw1")
    first = sign_in(client, "alice", "pw1").json()["token"]
    second = sign_in(client, "alice", "pw1").json()["token"]

    assert sign_out(client, first).status_code == 200
    # Ending one session leaves the other one active
    assert sign_out(client, second).status_code == 200
    assert sign_out(client, first).status_code == 404


def test_sign_in_after_sign_out_gets_fresh_token(client):
    sign_up(client, "alice", "pw1")
    old = sign_in(client, "alice", "pw1").json()["token"]
    sign_out(client, old)

    new = sign_in(client, "alice", "pw1").json()["token"]
    assert new != old
    assert sign_out(client, old).status_code == 404
    assert sign_out(client, new).status_code == 200


def test_sign_out_unknown_token(client):
    response = sign_out(client, "never-issued")
    assert response.status_code == 404
    assert response.json()["error"] == "NoSuchSession"


def test_token_has_at_least_128_bits(client):
    sign_up(client, "alice", "pw1")
    token = sign_in(client, "alice", "pw1").json()["token"]
    # url-safe base64: 6 bits per character
    assert len(token) * 6 >= 128


def test_missing_fields_are_rejected(client):
    response = client.post("/auth/sign-up", json={"identity": "user1"})
    assert response.status_code == 422


def test_malformed_body_is_rejected(client):
    response = client.post(
        "/auth/sign-in",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 422


def test_empty_identity_is_rejected(client):
    response = sign_up(client, "", "pw1")
    assert response.status_code == 422


def test_oversized_token_is_rejected(client):
    sign_up(client, "alice", "pw1")
    token = sign_in(client, "alice", "pw1").json()["token"]

    response = sign_out(client, "x" * 513)
    assert response.status_code == 422

    # The limit is far above the length of an issued token
    assert sign_out(client, token).status_code == 200


def test_sign_out_token_limit_is_documented(client):
    schema = client.get("/openapi.json").json()["components"]["schemas"]["SignOutRequest"]
    token = schema["properties"]["token"]
    assert token["maxLength"] == 512
    assert "512" in token["description"]


def test_service_survives_bad_requests(client):
    client.post("/auth/sign-out", json={})
    sign_out(client, "bogus")
    sign_in(client, "ghost", "x")

    assert sign_up(client, "alice", "pw1").status_code == 200
    assert client.get("/health").json()["status"] == "healthy"


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["accounts"] == 0
    assert body["active_sessions"] == 0
    assert "timestamp" in body


def test_apps_do_not_share_state():
    first = create_app(Settings())
    second = create_app(Settings())
    with TestClient(first) as a, TestClient(second) as b:
        assert sign_up(a, "alice", "pw1").status_code == 200
        assert sign_up(b, "alice", "pw1").status_code == 200
