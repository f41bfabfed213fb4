"""Public agent directory."""

from __future__ import annotations

from typing import Any

from akwaaba_shared.constants import (
    PROFILES_TABLE,
    PROPERTIES_TABLE,
    PropertyStatus,
    Role,
    VerificationStatus,
)
from akwaaba_shared.db import get_supabase_client

from akwaaba_api.services.profile_service import PUBLIC_PROFILE_FIELDS, public_view
from akwaaba_api.utils.cache import agent_search_cache
from akwaaba_api.utils.filtering import apply_text_search

SORTABLE_COLUMNS = frozenset({"full_name", "experience_years", "created_at", "company_name"})
AGENT_SEARCH_COLUMNS = ("full_name", "company_name", "bio")


def search_agents(
    *,
    query: str | None = None,
    city: str | None = None,
    region: str | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    offset: int = 0,
    limit: int = 20,
) -> tuple[list[dict[str, Any]], int | None]:
    """Verified agents matching the directory filters, with a short-lived cache."""
    if sort_by not in SORTABLE_COLUMNS:
        sort_by = "created_at"

    def _load() -> tuple[list[dict[str, Any]], int | None]:
        supabase = get_supabase_client()
        q = (
            supabase.table(PROFILES_TABLE)
            .select(", ".join(PUBLIC_PROFILE_FIELDS), count="exact")
            .eq("user_role", Role.AGENT.value)
            .eq("verification_status", VerificationStatus.VERIFIED.value)
        )
        q = apply_text_search(q, AGENT_SEARCH_COLUMNS, query)
        q = apply_text_search(q, ("city",), city)
        q = apply_text_search(q, ("region",), region)
        result = (
            q.order(sort_by, desc=sort_order.lower() != "asc")
            .range(offset, offset + limit - 1)
            .execute()
        )
        return [public_view(r) for r in result.data], result.count

    cache_key = f"agents:{query}:{city}:{region}:{sort_by}:{sort_order}:{offset}:{limit}"
    return agent_search_cache.get_or_load(cache_key, _load)


def get_public_agent(agent_id: str) -> dict[str, Any] | None:
    """A verified agent's public profile plus their active listings."""
    supabase = get_supabase_client()
    result = (
        supabase.table(PROFILES_TABLE)
        .select(", ".join(PUBLIC_PROFILE_FIELDS))
        .eq("id", agent_id)
        .eq("user_role", Role.AGENT.value)
        .eq("verification_status", VerificationStatus.VERIFIED.value)
        .limit(1)
        .execute()
    )
    if not result.data:
        return None

    agent = public_view(result.data[0])
    listings = (
        supabase.table(PROPERTIES_TABLE)
        .select("*, property_images(*)")
        .eq("seller_id", str(agent["user_id"]))
        .eq("status", PropertyStatus.ACTIVE.value)
        .order("created_at", desc=True)
        .execute()
    )
    return {**agent, "properties": listings.data, "properties_count": len(listings.data)}
