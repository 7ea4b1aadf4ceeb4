"""Tests for the placeholder authentication endpoints."""

import pytest

REGISTER_URL = "/api/v1/auth/register"
LOGIN_URL = "/api/v1/auth/login"
REFRESH_URL = "/api/v1/auth/refresh"

VALID_REGISTRATION = {
    "email": "jane@example.com",
    "password": "s3cret-pass",
    "name": "Jane Doe",
}


@pytest.mark.unit
class TestRegister:
    def test_valid_registration_echoes_user(self, client):
        response = client.post(REGISTER_URL, json=VALID_REGISTRATION)

        assert response.status_code == 201
        assert response.json() == {
            "message": "User registered successfully",
            "user": {"email": "jane@example.com", "name": "Jane Doe"},
        }

    def test_email_is_echoed_as_submitted(self, client):
        body = dict(VALID_REGISTRATION, email="Jane.Doe@EXAMPLE.COM")

        response = client.post(REGISTER_URL, json=body)

        assert response.status_code == 201
        assert response.json()["user"]["email"] == "Jane.Doe@EXAMPLE.COM"

    def test_password_is_never_echoed(self, client):
        response = client.post(REGISTER_URL, json=VALID_REGISTRATION)

        assert "s3cret-pass" not in response.text

    @pytest.mark.parametrize("missing", ["email", "password", "name"])
    def test_missing_field_is_rejected(self, client, missing):
        body = {k: v for k, v in VALID_REGISTRATION.items() if k != missing}

        response = client.post(REGISTER_URL, json=body)

        assert response.status_code == 400
        assert missing in response.json()["error"]

    def test_short_password_is_rejected(self, client):
        body = dict(VALID_REGISTRATION, password="1234567")

        response = client.post(REGISTER_URL, json=body)

        assert response.status_code == 400
        assert "password" in response.json()["error"]

    def test_eight_character_password_is_accepted(self, client):
        body = dict(VALID_REGISTRATION, password="12345678")

        assert client.post(REGISTER_URL, json=body).status_code == 201

    def test_invalid_email_is_rejected(self, client):
        body = dict(VALID_REGISTRATION, email="not-an-email")

        response = client.post(REGISTER_URL, json=body)

        assert response.status_code == 400
        assert "email" in response.json()["error"]

    def test_empty_name_is_rejected(self, client):
        body = dict(VALID_REGISTRATION, name="")

        response = client.post(REGISTER_URL, json=body)

        assert response.status_code == 400
        assert "name" in response.json()["error"]

    def test_malformed_json_is_rejected(self, client):
        response = client.post(
            REGISTER_URL,
            content=b'{"email": "jane@example.com",',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_missing_body_is_rejected(self, client):
        response = client.post(REGISTER_URL)

        assert response.status_code == 400
        assert "error" in response.json()


@pytest.mark.unit
class TestLogin:
    def test_well_formed_login_returns_tokens(self, client):
        response = client.post(
            LOGIN_URL, json={"email": "jane@example.com", "password": "anything"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token"] == "sample-jwt-token"
        assert body["refresh_token"] == "sample-refresh-token"

    @pytest.mark.parametrize(
        "body",
        [
            {"email": "jane@example.com"},
            {"password": "anything"},
            {"email": "jane@example.com", "password": ""},
            {"email": "nope", "password": "anything"},
            ["not", "an", "object"],
        ],
    )
    def test_malformed_login_is_rejected(self, client, body):
        response = client.post(LOGIN_URL, json=body)

        assert response.status_code == 400
        assert response.json()["error"]


@pytest.mark.unit
class TestRefresh:
    def test_refresh_needs_no_body(self, client):
        response = client.post(REFRESH_URL)

        assert response.status_code == 200
        assert response.json() == {"token": "new-sample-jwt-token"}

    def test_refresh_ignores_body(self, client):
        response = client.post(REFRESH_URL, json={"refresh_token": "whatever"})

        assert response.status_code == 200
        assert response.json() == {"token": "new-sample-jwt-token"}
