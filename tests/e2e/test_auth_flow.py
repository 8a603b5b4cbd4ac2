"""End-to-end tests for the authentication HTTP API."""

from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from invoicely.config import Settings
from invoicely.domain.value import AuthMode
from invoicely.interface.api.app import create_app
from invoicely.interface.api.cookies import SESSION_COOKIE, STATE_COOKIE
from tests.di import build_test_container, make_test_settings

FRONTEND = "http://localhost:5173"


def make_client(settings: Settings) -> TestClient:
    app = create_app(container=build_test_container(settings=settings), settings=settings)
    return TestClient(app)


@pytest.fixture
def client():
    """Session mode, Google configured."""
    return make_client(make_test_settings())


@pytest.fixture
def token_client():
    """Token mode, Google configured."""
    return make_client(make_test_settings(mode=AuthMode.TOKEN))


@pytest.fixture
def disabled_client():
    """Google not configured."""
    return make_client(make_test_settings(google_enabled=False))


def signup(client: TestClient, email: str = "alice@example.com", password: str = "hunter22"):
    return client.post(
        "/auth/signup",
        json={"display_name": "alice", "email": email, "password": password},
    )


def google_sign_in(client: TestClient, code: str = "mock-code"):
    """Run the redirect dance against the mock Google client."""
    start = client.get("/auth/google", follow_redirects=False)
    assert start.status_code == 302
    state = parse_qs(urlparse(start.headers["location"]).query)["state"][0]

    return client.get(
        "/auth/google/callback",
        params={"code": code, "state": state},
        follow_redirects=False,
    )


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["auth_mode"] == "session"
        assert data["google_sign_in"] is True


class TestPasswordFlow:
    """Signup, login and /auth/me with bearer tokens."""

    def test_signup_returns_user_and_token(self, client):
        response = signup(client, email="Alice@Example.com")

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User created successfully"
        assert data["user"]["email"] == "alice@example.com"
        assert "password_hash" not in data["user"]
        assert data["token"]

    def test_signup_token_authenticates(self, client):
        token = signup(client).json()["token"]

        response = client.get("/auth/me", headers=bearer(token))

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "alice@example.com"
        assert response.json()["method"] == "bearer"

    def test_duplicate_signup_conflicts(self, client):
        signup(client)

        response = signup(client, email="ALICE@example.com")

        assert response.status_code == 409
        assert response.json()["code"] == "duplicate_email"

    def test_signup_validation_errors(self, client):
        response = client.post(
            "/auth/signup",
            json={"display_name": "al", "email": "nope", "password": "123"},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "validation_error"
        assert {e["field"] for e in data["errors"]} == {"display_name", "email", "password"}

    def test_signup_missing_fields(self, client):
        response = client.post("/auth/signup", json={"email": "a@example.com"})

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_login_malformed_email_is_validation_error(self, client):
        response = client.post(
            "/auth/login", json={"email": "nope", "password": "whatever"}
        )

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "validation_error"
        assert [e["field"] for e in data["errors"]] == ["email"]

    def test_login_returns_token(self, client):
        signup(client)

        response = client.post(
            "/auth/login", json={"email": "alice@example.com", "password": "hunter22"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        me = client.get("/auth/me", headers=bearer(response.json()["token"]))
        assert me.status_code == 200

    def test_login_failures_look_the_same(self, client):
        signup(client)

        wrong = client.post(
            "/auth/login", json={"email": "alice@example.com", "password": "wrong!!"}
        )
        unknown = client.post(
            "/auth/login", json={"email": "bob@example.com", "password": "hunter22"}
        )

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json()
        assert wrong.json()["code"] == "invalid_credentials"

    def test_me_without_credentials(self, client):
        response = client.get("/auth/me")

        assert response.status_code == 401
        assert response.json()["code"] == "unauthenticated"

    def test_me_with_bad_token(self, client):
        response = client.get("/auth/me", headers=bearer("not-a-token"))

        assert response.status_code == 401

    def test_bearer_logout_is_noop(self, client):
        token = signup(client).json()["token"]

        response = client.post("/auth/logout", headers=bearer(token))

        assert response.status_code == 200
        assert response.json()["session_destroyed"] is False
        assert client.get("/auth/me", headers=bearer(token)).status_code == 200


class TestGoogleSessionFlow:
    """Google sign-in in session mode."""

    def test_initiate_redirects_to_google(self, client):
        response = client.get("/auth/google", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"].startswith("https://accounts.google.com/")
        assert STATE_COOKIE in response.cookies

    def test_callback_sets_session_cookie(self, client):
        response = google_sign_in(client)

        assert response.status_code == 302
        assert response.headers["location"] == f"{FRONTEND}/auth/callback"
        assert SESSION_COOKIE in response.cookies

    def test_session_cookie_authenticates(self, client):
        google_sign_in(client)

        response = client.get("/auth/me")

        assert response.status_code == 200
        data = response.json()
        assert data["method"] == "session"
        assert data["user"]["email"] == "mock.user@gmail.com"
        assert data["user"]["is_linked"] is True
        assert data["user"]["has_password"] is False

    def test_logout_ends_session(self, client):
        google_sign_in(client)
        cookie = client.cookies.get(SESSION_COOKIE)

        response = client.post("/auth/logout")

        assert response.status_code == 200
        assert response.json()["session_destroyed"] is True

        # Replaying the old cookie no longer works
        replay = client.get("/auth/me", headers={"Cookie": f"{SESSION_COOKIE}={cookie}"})
        assert replay.status_code == 401

    def test_google_only_account_cannot_password_login(self, client):
        google_sign_in(client)

        response = client.post(
            "/auth/login", json={"email": "mock.user@gmail.com", "password": "whatever"}
        )

        assert response.status_code == 401
        assert response.json()["code"] == "external_only_account"

    def test_google_sign_in_links_password_account(self, client):
        signup(client, email="mock.user@gmail.com")

        google_sign_in(client)
        me = client.get("/auth/me").json()["user"]

        assert me["has_password"] is True
        assert me["is_linked"] is True
        login = client.post(
            "/auth/login", json={"email": "mock.user@gmail.com", "password": "hunter22"}
        )
        assert login.status_code == 200
        assert login.json()["user"]["id"] == me["id"]

    def test_state_mismatch_redirects_with_error(self, client):
        client.get("/auth/google", follow_redirects=False)

        response = client.get(
            "/auth/google/callback",
            params={"code": "mock-code", "state": "forged"},
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == f"{FRONTEND}/?error=auth_failed"
        assert SESSION_COOKIE not in response.cookies

    def test_callback_without_state_cookie_fails(self, client):
        response = client.get(
            "/auth/google/callback",
            params={"code": "mock-code", "state": "anything"},
            follow_redirects=False,
        )

        assert response.headers["location"] == f"{FRONTEND}/?error=auth_failed"

    def test_provider_error_redirects_with_error(self, client):
        response = google_sign_in(client, code="invalid")

        assert response.headers["location"] == f"{FRONTEND}/?error=auth_failed"

    def test_missing_profile_redirects_with_no_user(self, client):
        response = google_sign_in(client, code="no-profile")

        assert response.headers["location"] == f"{FRONTEND}/?error=no_user"

    def test_user_declined_consent(self, client):
        response = client.get(
            "/auth/google/callback",
            params={"error": "access_denied"},
            follow_redirects=False,
        )

        assert response.headers["location"] == f"{FRONTEND}/?error=auth_failed"


class TestGoogleTokenFlow:
    """Google sign-in in token mode."""

    def test_callback_redirects_with_token(self, token_client):
        response = google_sign_in(token_client)

        location = urlparse(response.headers["location"])
        assert f"{location.scheme}://{location.netloc}{location.path}" == (
            f"{FRONTEND}/auth/callback"
        )
        assert SESSION_COOKIE not in response.cookies

        token = parse_qs(location.query)["token"][0]
        me = token_client.get("/auth/me", headers=bearer(token))
        assert me.status_code == 200
        assert me.json()["method"] == "bearer"


class TestGoogleDisabled:
    def test_initiate_unavailable(self, disabled_client):
        response = disabled_client.get("/auth/google", follow_redirects=False)

        assert response.status_code == 503
        assert response.json()["code"] == "provider_disabled"

    def test_password_flow_still_works(self, disabled_client):
        assert signup(disabled_client).status_code == 201
