"""Tests for session resolution, role gating and the auth endpoints."""

from __future__ import annotations

import time
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from jose import jwt
from supabase import AuthApiError

from akwaaba_shared.config import settings
from tests.conftest import make_supabase, payloads, use_supabase


def _token(sub=None, *, secret=None, expires_in=3600):
    claims = {
        "sub": sub or str(uuid4()),
        "aud": settings.jwt_audience,
        "email": "caller@example.com",
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(claims, secret or settings.jwt_secret, algorithm="HS256")


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Session resolution
# ---------------------------------------------------------------------------

def test_invalid_token_rejected(client):
    response = client.get("/api/user/profile", headers=_bearer("not-a-jwt"))
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or expired session"}


def test_expired_token_rejected(client):
    response = client.get("/api/user/profile", headers=_bearer(_token(expires_in=-60)))
    assert response.status_code == 401


def test_wrong_secret_rejected(client):
    response = client.get("/api/user/profile", headers=_bearer(_token(secret="other-secret")))
    assert response.status_code == 401


def test_invalid_token_on_public_route(client):
    response = client.get(f"/api/properties/{uuid4()}", headers=_bearer("garbage"))
    assert response.status_code == 401


def test_missing_profile_treated_as_customer(client):
    mock = make_supabase()
    with use_supabase(mock):
        response = client.get("/api/admin/stats", headers=_bearer(_token()))
    assert response.status_code == 403


def test_admin_profile_grants_access(client):
    user_id = str(uuid4())
    admin_row = {
        "id": str(uuid4()),
        "email": "admin@akwaaba.homes",
        "full_name": "Site Admin",
        "user_role": "admin",
        "verification_status": "verified",
        "is_verified": True,
    }
    mock = make_supabase({"profiles": ([admin_row], 1)})
    with use_supabase(mock):
        response = client.get("/api/admin/stats", headers=_bearer(_token(user_id)))

    assert response.status_code == 200
    mock.calls["profiles"][0].eq.assert_any_call("user_id", user_id)


def test_unknown_role_falls_back_to_customer(client):
    row = {"id": str(uuid4()), "user_role": "superuser"}
    mock = make_supabase({"profiles": ([row], 1)})
    with use_supabase(mock):
        response = client.get("/api/admin/stats", headers=_bearer(_token()))
    assert response.status_code == 403


def test_session_cookie_accepted(client, sample_agent):
    mock = make_supabase({"profiles": ([sample_agent], 1)})
    client.cookies.set(settings.session_cookie_name, _token(sample_agent["user_id"]))
    with use_supabase(mock):
        response = client.get("/api/user/profile/completion")
    assert response.status_code == 200


def test_no_credentials_is_unauthorized(client):
    response = client.get("/api/seller/dashboard")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


# ---------------------------------------------------------------------------
# Signup / login / logout
# ---------------------------------------------------------------------------

def _auth_response(user_id, email, with_session=True):
    response = MagicMock()
    response.user.id = user_id
    response.user.email = email
    if with_session:
        response.session.access_token = "access-token"
        response.session.refresh_token = "refresh-token"
        response.session.expires_in = 3600
        response.session.expires_at = 1_900_000_000
        response.session.token_type = "bearer"
    else:
        response.session = None
    return response


@pytest.fixture()
def auth_client():
    with patch("akwaaba_api.services.auth_service.create_auth_client") as factory:
        yield factory.return_value


def test_signup_agent_creates_pending_profile(client, auth_client):
    user_id = str(uuid4())
    auth_client.auth.sign_up.return_value = _auth_response(user_id, "kofi@example.com", with_session=False)
    mock = make_supabase()
    with use_supabase(mock):
        response = client.post(
            "/api/auth/signup",
            json={
                "email": "kofi@example.com",
                "password": "s3cure-pass",
                "full_name": "Kofi Boateng",
                "user_role": "agent",
            },
        )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Account created. Your agent profile is pending verification."
    assert body["data"]["session"] is None
    row = payloads(mock, "profiles", "insert")[0]
    assert row["user_id"] == user_id
    assert row["user_role"] == "agent"
    assert row["verification_status"] == "pending"
    assert row["is_verified"] is False


def test_signup_cannot_request_admin(client, auth_client):
    response = client.post(
        "/api/auth/signup",
        json={
            "email": "x@example.com",
            "password": "s3cure-pass",
            "full_name": "Mallory",
            "user_role": "admin",
        },
    )
    assert response.status_code == 400
    auth_client.auth.sign_up.assert_not_called()


def test_signup_rejected_by_auth(client, auth_client):
    auth_client.auth.sign_up.side_effect = AuthApiError("User already registered", 422, None)
    response = client.post(
        "/api/auth/signup",
        json={"email": "taken@example.com", "password": "s3cure-pass", "full_name": "Ama Owusu"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "User already registered"}


def test_login_sets_session_cookie(client, auth_client, sample_agent):
    auth_client.auth.sign_in_with_password.return_value = _auth_response(
        sample_agent["user_id"], sample_agent["email"]
    )
    mock = make_supabase({"profiles": ([{**sample_agent, "admin_notes": "x"}], 1)})
    with use_supabase(mock):
        response = client.post(
            "/api/auth/login",
            json={"email": sample_agent["email"], "password": "s3cure-pass"},
        )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["session"]["access_token"] == "access-token"
    assert "admin_notes" not in data["profile"]
    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"{settings.session_cookie_name}=access-token")
    assert "HttpOnly" in cookie
    assert "Max-Age=3600" in cookie


def test_login_bad_credentials(client, auth_client):
    auth_client.auth.sign_in_with_password.side_effect = AuthApiError(
        "Invalid login credentials", 400, "invalid_credentials"
    )
    response = client.post("/api/auth/login", json={"email": "a@example.com", "password": "nope"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}
    assert "set-cookie" not in response.headers


def test_logout_clears_cookie(client):
    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"{settings.session_cookie_name}=")
    assert "Max-Age=0" in cookie
