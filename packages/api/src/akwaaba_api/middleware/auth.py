"""Session resolution and role-gating dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from fastapi import Depends, HTTPException, Request
from jose import JWTError
from jose import jwt as jose_jwt

from akwaaba_shared.config import settings
from akwaaba_shared.constants import PROFILES_TABLE, Role
from akwaaba_shared.db import get_supabase_client

logger = structlog.get_logger(__name__)

ADMIN_REQUIRED = "Insufficient permissions. Admin access required."


@dataclass
class AuthUser:
    """The caller of the current request, as seen by route handlers."""

    user_id: str
    role: Role = Role.CUSTOMER
    email: str | None = None
    profile_id: str | None = None
    full_name: str | None = None
    verification_status: str | None = None
    is_verified: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_agent(self) -> bool:
        return self.role is Role.AGENT


def _validate_jwt(token: str) -> dict[str, Any] | None:
    """Validate a Supabase JWT and return its claims."""
    try:
        return jose_jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=["HS256"],
            audience=settings.jwt_audience,
        )
    except JWTError:
        return None


def _extract_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return request.cookies.get(settings.session_cookie_name) or None


def _parse_role(value: Any) -> Role:
    try:
        return Role(value)
    except ValueError:
        return Role.CUSTOMER


async def get_current_user(request: Request) -> AuthUser | None:
    """Resolve the session from the bearer token or the session cookie.

    Returns None if no credentials are provided (public access).
    Raises 401 if credentials are present but invalid.
    """
    token = _extract_token(request)
    if token is None:
        return None

    claims = _validate_jwt(token)
    if claims is None or not claims.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    user_id = str(claims["sub"])
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROFILES_TABLE)
        .select("id, email, full_name, user_role, verification_status, is_verified")
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    if not result.data:
        return AuthUser(user_id=user_id, email=claims.get("email"))

    row = result.data[0]
    return AuthUser(
        user_id=user_id,
        role=_parse_role(row.get("user_role")),
        email=row.get("email") or claims.get("email"),
        profile_id=str(row["id"]) if row.get("id") else None,
        full_name=row.get("full_name"),
        verification_status=row.get("verification_status"),
        is_verified=bool(row.get("is_verified")),
    )


def require_auth():
    """Dependency factory that requires a session."""

    async def _dependency(
        user: AuthUser | None = Depends(get_current_user),
    ) -> AuthUser:
        if user is None:
            raise HTTPException(status_code=401, detail="Unauthorized")
        return user

    return _dependency


def require_role(*roles: Role, detail: str | None = None):
    """Dependency factory that requires a session with one of `roles`."""
    allowed = frozenset(roles)

    async def _dependency(
        user: AuthUser | None = Depends(get_current_user),
    ) -> AuthUser:
        if user is None:
            raise HTTPException(status_code=401, detail="Unauthorized")
        if user.role not in allowed:
            logger.info(
                "role_denied",
                user_id=user.user_id,
                role=user.role.value,
                allowed=sorted(r.value for r in allowed),
            )
            raise HTTPException(
                status_code=403,
                detail=detail
                or f"Insufficient permissions. Requires one of: "
                f"{', '.join(sorted(r.value for r in allowed))}.",
            )
        return user

    return _dependency


def require_admin():
    return require_role(Role.ADMIN, detail=ADMIN_REQUIRED)
