"""Thin proxy over Supabase Auth for signup and password login."""

from __future__ import annotations

from typing import Any

import structlog
from supabase import AuthApiError

from akwaaba_shared.constants import Role
from akwaaba_shared.db import create_auth_client

from akwaaba_api.services import activity_service, profile_service

logger = structlog.get_logger(__name__)


class AuthFailed(Exception):
    """Supabase Auth rejected the credentials or the signup."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _session_dict(session: Any) -> dict[str, Any] | None:
    if session is None:
        return None
    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "expires_in": session.expires_in,
        "expires_at": session.expires_at,
        "token_type": session.token_type,
    }


def signup(payload: Any) -> dict[str, Any]:
    """Create the auth identity, then the profile row.

    Agents start with `verification_status=pending` and cannot list until an
    admin approves them.
    """
    client = create_auth_client()
    try:
        response = client.auth.sign_up({
            "email": str(payload.email),
            "password": payload.password,
            "options": {"data": {"full_name": payload.full_name, "user_role": payload.user_role}},
        })
    except AuthApiError as exc:
        logger.info("signup_rejected", email=str(payload.email), error=exc.message)
        raise AuthFailed(exc.message) from exc

    if response.user is None:
        raise AuthFailed("Signup failed")

    role = Role(payload.user_role)
    profile = profile_service.create_profile(
        str(response.user.id),
        str(payload.email),
        role=role,
        full_name=payload.full_name,
        phone=payload.phone,
    )
    activity_service.track_event("signup", user_id=str(response.user.id), metadata={"role": role.value})
    logger.info("signup_completed", user_id=str(response.user.id), role=role.value)
    return {
        "user": {"id": str(response.user.id), "email": response.user.email},
        "profile": profile_service.public_view(profile),
        "session": _session_dict(response.session),
    }


def login(email: str, password: str) -> dict[str, Any]:
    client = create_auth_client()
    try:
        response = client.auth.sign_in_with_password({"email": email, "password": password})
    except AuthApiError as exc:
        logger.info("login_failed", email=email, error=exc.message)
        raise AuthFailed("Invalid email or password", status_code=401) from exc

    if response.session is None or response.user is None:
        raise AuthFailed("Invalid email or password", status_code=401)

    user_id = str(response.user.id)
    profile = profile_service.get_profile(user_id)
    activity_service.track_event("login", user_id=user_id)
    return {
        "user": {"id": user_id, "email": response.user.email},
        "profile": profile_service.public_view(profile) if profile else None,
        "session": _session_dict(response.session),
    }
