"""Integration tests for the authentication endpoints."""

from __future__ import annotations

import pytest

from modules.users.models import Role, User

pytestmark = pytest.mark.integration

REGISTER_URL = "/api/v1/auth/register/"
LOGIN_URL = "/api/v1/auth/login/"
ME_URL = "/api/v1/auth/me/"
REFRESH_URL = "/api/v1/auth/token/refresh/"


class TestRegister:
    def test_register_returns_client_and_tokens(self, api_client):
        response = api_client.post(
            REGISTER_URL,
            {"name": "Maria", "email": "maria@example.com", "password": "secret1"},
            format="json",
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["user"]["role"] == Role.CLIENT
        assert body["data"]["access"]
        assert body["data"]["refresh"]
        assert "password" not in body["data"]["user"]

    def test_role_in_payload_is_ignored(self, api_client):
        api_client.post(
            REGISTER_URL,
            {
                "name": "Sneaky",
                "email": "sneaky@example.com",
                "password": "secret1",
                "role": "ADMIN",
            },
            format="json",
        )
        assert User.objects.get(email="sneaky@example.com").role == Role.CLIENT

    def test_duplicate_email_conflict(self, api_client, client_user):
        response = api_client.post(
            REGISTER_URL,
            {"name": "Dup", "email": "client@example.com", "password": "secret1"},
            format="json",
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_short_password_rejected(self, api_client):
        response = api_client.post(
            REGISTER_URL,
            {"name": "Maria", "email": "maria@example.com", "password": "123"},
            format="json",
        )
        assert response.status_code == 400


class TestLogin:
    def test_login_and_use_token(self, api_client, client_user):
        response = api_client.post(
            LOGIN_URL,
            {"email": "client@example.com", "password": "client123"},
            format="json",
        )
        assert response.status_code == 200
        access = response.json()["data"]["access"]

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        me = api_client.get(ME_URL)
        assert me.status_code == 200
        assert me.json()["data"]["email"] == "client@example.com"

    def test_bad_credentials(self, api_client, client_user):
        response = api_client.post(
            LOGIN_URL,
            {"email": "client@example.com", "password": "wrong"},
            format="json",
        )
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_refresh(self, api_client, client_user):
        login = api_client.post(
            LOGIN_URL,
            {"email": "client@example.com", "password": "client123"},
            format="json",
        )
        refresh = login.json()["data"]["refresh"]
        response = api_client.post(REFRESH_URL, {"refresh": refresh}, format="json")
        assert response.status_code == 200
        assert "access" in response.json()


class TestMe:
    def test_requires_authentication(self, api_client):
        response = api_client.get(ME_URL)
        assert response.status_code == 401

    def test_invalid_token(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        assert api_client.get(ME_URL).status_code == 401
