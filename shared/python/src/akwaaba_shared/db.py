"""
db.py — Supabase client singletons.

Usage:
    from akwaaba_shared.db import get_supabase_client, create_auth_client

    supabase = get_supabase_client()                    # anon key (public reads)
    supabase = get_supabase_client(service_role=True)   # service key (server writes)
    auth = create_auth_client()                         # fresh client for sign-in flows
"""

from __future__ import annotations

import threading
from typing import Optional

import structlog
from supabase import Client, create_client
from supabase.client import ClientOptions

from akwaaba_shared.config import settings
from akwaaba_shared.errors import ConfigurationError

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Supabase: one client per role per process, guarded by a lock
# ---------------------------------------------------------------------------
_supabase_lock = threading.Lock()
_supabase_anon: Optional[Client] = None
_supabase_service: Optional[Client] = None


def _server_options() -> ClientOptions:
    return ClientOptions(auto_refresh_token=False, persist_session=False)


def get_supabase_client(*, service_role: bool = False) -> Client:
    """
    Return a singleton Supabase client.

    Args:
        service_role: If True, uses the service role key (bypasses RLS; the
                      API enforces roles itself before using it).
                      If False (default), uses the anon key (RLS applies).

    Returns:
        supabase.Client instance.
    """
    global _supabase_anon, _supabase_service

    with _supabase_lock:
        if service_role:
            if _supabase_service is None:
                if not settings.supabase_service_key:
                    raise ConfigurationError(
                        "SUPABASE_SERVICE_KEY is not set. "
                        "Set it in .env before using service_role=True."
                    )
                _supabase_service = create_client(
                    settings.supabase_url,
                    settings.supabase_service_key,
                    options=_server_options(),
                )
                logger.info("supabase_client_created", role="service_role")
            return _supabase_service
        else:
            if _supabase_anon is None:
                if not settings.supabase_anon_key:
                    raise ConfigurationError(
                        "SUPABASE_ANON_KEY is not set. Set it in .env."
                    )
                _supabase_anon = create_client(
                    settings.supabase_url,
                    settings.supabase_anon_key,
                    options=_server_options(),
                )
                logger.info("supabase_client_created", role="anon")
            return _supabase_anon


def create_auth_client() -> Client:
    """
    Return a new anon-key client for a single sign-up / sign-in exchange.

    Sign-in stores the session on the client instance, so these flows never
    touch the shared singletons.
    """
    if not settings.supabase_anon_key:
        raise ConfigurationError("SUPABASE_ANON_KEY is not set. Set it in .env.")
    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=_server_options(),
    )


def reset_supabase_clients() -> None:
    """Reset singleton clients (useful in tests)."""
    global _supabase_anon, _supabase_service
    with _supabase_lock:
        _supabase_anon = None
        _supabase_service = None
