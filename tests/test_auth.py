from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from conftest import auth_headers, test_settings
from kanban.errors import AuthenticationError
from kanban.security import create_access_token, decode_access_token, get_password_hash, verify_password


def test_password_hashing():
    hashed = get_password_hash("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", "not-a-bcrypt-hash")


def test_access_token_round_trip():
    token = create_access_token(7, "a@example.com", test_settings)
    payload = decode_access_token(token, test_settings)

    assert payload["sub"] == "7"
    assert payload["email"] == "a@example.com"
    assert payload["iss"] == "simple-kanban"


def test_expired_or_foreign_tokens_are_rejected():
    expired = create_access_token(7, "a@example.com", test_settings, expires_delta=timedelta(seconds=-5))
    with pytest.raises(AuthenticationError):
        decode_access_token(expired, test_settings)

    other = test_settings.model_copy(update={"JWT_SECRET_KEY": "someone-else"})
    forged = create_access_token(7, "a@example.com", other)
    with pytest.raises(AuthenticationError):
        decode_access_token(forged, test_settings)


def test_register_and_login(client: TestClient):
    response = client.post("/api/v1/auth/register", json={"email": "Alice@Example.com", "password": "secret123"})
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "alice@example.com"
    assert body["token"]
    assert body["token_type"] == "bearer"

    response = client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert response.status_code == 200
    assert response.json()["user"]["id"] == body["user"]["id"]


def test_duplicate_registration_conflicts(client: TestClient):
    auth_headers(client, "bob@example.com")

    response = client.post("/api/v1/auth/register", json={"email": "bob@example.com", "password": "another1"})

    assert response.status_code == 409
    assert response.json() == {"error": "Email already registered"}


def test_login_with_wrong_password(client: TestClient):
    auth_headers(client, "carol@example.com")

    response = client.post("/api/v1/auth/login", json={"email": "carol@example.com", "password": "nope-nope"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}


def test_short_password_is_a_bad_request(client: TestClient):
    response = client.post("/api/v1/auth/register", json={"email": "dave@example.com", "password": "123"})

    assert response.status_code == 400
    assert "password" in response.json()["error"]


def test_profile_requires_valid_token(client: TestClient):
    assert client.get("/api/v1/auth/profile").status_code == 401

    response = client.get("/api/v1/auth/profile", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid authentication token"}


def test_profile_update(client: TestClient):
    headers = auth_headers(client, "erin@example.com")

    response = client.put("/api/v1/auth/profile", json={"email": "erin.new@example.com"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["email"] == "erin.new@example.com"

    response = client.put("/api/v1/auth/profile", json={"password": "changed99"}, headers=headers)
    assert response.status_code == 200
    login = client.post("/api/v1/auth/login", json={"email": "erin.new@example.com", "password": "changed99"})
    assert login.status_code == 200


def test_health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
