"""Integration tests for the auth endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from identity.api.routes import router
from identity.user.registration import ensure_default_admin
from shared.utils.exception_handlers import register_storefront_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(router)
    register_storefront_exception_handlers(app)
    return TestClient(app)


def _signup(client, email="jane@example.com", password="secret1"):
    return client.post("/auth/signup", json={"name": "Jane Doe", "email": email, "password": password})


class TestSignUpEndpoint:
    def test_signup(self, client):
        response = _signup(client)
        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["token"]
        assert data["user"]["email"] == "jane@example.com"
        assert data["user"]["is_admin"] is False

    def test_duplicate_signup(self, client):
        _signup(client)
        response = _signup(client)
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Email already exists",
            "token": None,
            "user": None,
        }


class TestLogInEndpoint:
    def test_login(self, client):
        _signup(client)
        response = client.post("/auth/login", json={"email": "jane@example.com", "password": "secret1"})
        assert response.status_code == 200
        assert response.json()["message"] == "Login successful!"

    def test_invalid_login(self, client):
        response = client.post("/auth/login", json={"email": "jane@example.com", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_admin_login(self, client):
        ensure_default_admin()
        response = client.post("/auth/login", json={"email": "admin@store.com", "password": "admin123"})
        assert response.json()["user"]["is_admin"] is True


class TestSessionEndpoints:
    def test_me(self, client):
        token = _signup(client).json()["token"]
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == "jane@example.com"

    def test_me_without_token(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401

    def test_logout_invalidates_token(self, client):
        token = _signup(client).json()["token"]
        headers = {"Authorization": f"Bearer {token}"}

        assert client.post("/auth/logout", headers=headers).json()["success"] is True
        assert client.get("/auth/me", headers=headers).status_code == 401
