"""Shared FastAPI dependencies."""

from __future__ import annotations

from akwaaba_shared.constants import Role
from akwaaba_shared.db import get_supabase_client

from akwaaba_api.middleware.auth import (
    ADMIN_REQUIRED,
    AuthUser,
    get_current_user,
    require_admin,
    require_auth,
    require_role,
)
from akwaaba_api.utils.pagination import PaginationParams

require_seller = require_role(
    Role.AGENT,
    Role.ADMIN,
    detail="Insufficient permissions. Agent access required.",
)

__all__ = [
    "ADMIN_REQUIRED",
    "AuthUser",
    "PaginationParams",
    "get_current_user",
    "get_supabase_client",
    "require_admin",
    "require_auth",
    "require_role",
    "require_seller",
]
