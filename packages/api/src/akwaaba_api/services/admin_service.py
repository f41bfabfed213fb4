"""Admin moderation: agent verification, listing approval, users and stats."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog

from akwaaba_shared.constants import (
    INQUIRIES_TABLE,
    PROFILES_TABLE,
    PROPERTIES_TABLE,
    ApprovalStatus,
    PropertyStatus,
    Role,
    VerificationStatus,
)
from akwaaba_shared.db import get_supabase_client
from akwaaba_shared.errors import InvalidTransitionError
from akwaaba_shared.workflow import ensure_transition

from akwaaba_api.services import activity_service, property_service
from akwaaba_api.utils.cache import admin_stats_cache, featured_cache
from akwaaba_api.utils.filtering import (
    apply_equals,
    apply_range_filters,
    apply_text_search,
)

logger = structlog.get_logger(__name__)

AGENT_SEARCH_COLUMNS = ("full_name", "email", "company_name")
PROPERTY_SEARCH_COLUMNS = ("title", "description", "address", "city")
USER_SEARCH_COLUMNS = ("full_name", "email")
VERIFIED_AGENT_FIELDS = (
    "id", "user_id", "email", "full_name", "verification_status",
    "is_verified", "admin_notes", "verified_by",
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Agents
# ---------------------------------------------------------------------------

def list_agents(
    *,
    verification_status: str | None = None,
    search: str | None = None,
    offset: int = 0,
    limit: int = 20,
) -> tuple[list[dict[str, Any]], int | None]:
    supabase = get_supabase_client(service_role=True)
    query = (
        supabase.table(PROFILES_TABLE)
        .select("*", count="exact")
        .eq("user_role", Role.AGENT.value)
    )
    query = apply_equals(query, verification_status=verification_status)
    query = apply_text_search(query, AGENT_SEARCH_COLUMNS, search)
    result = (
        query.order("created_at", desc=True)
        .range(offset, offset + limit - 1)
        .execute()
    )
    return result.data, result.count


def get_agent(agent_id: str) -> dict[str, Any] | None:
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROFILES_TABLE)
        .select("*")
        .eq("id", agent_id)
        .eq("user_role", Role.AGENT.value)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def verify_agent(
    agent: dict[str, Any],
    *,
    action: str,
    admin_id: str,
    reason: str | None = None,
    admin_notes: str | None = None,
) -> dict[str, Any]:
    """Approve or reject a pending agent in a single UPDATE.

    The status is read before the write with no compare-and-swap, so two
    admins acting at once both succeed and the later write wins.
    """
    current = agent.get("verification_status") or VerificationStatus.PENDING.value
    if current != VerificationStatus.PENDING.value:
        raise InvalidTransitionError(
            f"Agent is already {current}",
            details={"verification_status": current},
        )
    target = VerificationStatus.VERIFIED if action == "approve" else VerificationStatus.REJECTED
    ensure_transition("verification", current, target)

    update: dict[str, Any] = {
        "verification_status": target.value,
        "is_verified": target is VerificationStatus.VERIFIED,
        "admin_notes": admin_notes,
        "verified_by": admin_id,
        "updated_at": _now(),
    }
    if target is VerificationStatus.REJECTED and reason:
        update["rejection_reason"] = reason

    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROFILES_TABLE)
        .update(update)
        .eq("id", str(agent["id"]))
        .execute()
    )
    updated = result.data[0] if result.data else {**agent, **update}

    admin_stats_cache.clear()
    activity_service.log_admin_action(
        admin_id,
        f"agent_{action}",
        PROFILES_TABLE,
        str(agent["id"]),
        {"agent_email": agent.get("email"), "reason": reason},
    )
    return {k: updated.get(k) for k in VERIFIED_AGENT_FIELDS}


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

def list_properties(
    *,
    status: str | None = None,
    approval_status: str | None = None,
    property_type: str | None = None,
    listing_type: str | None = None,
    seller_id: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    search: str | None = None,
    offset: int = 0,
    limit: int = 20,
) -> tuple[list[dict[str, Any]], int | None]:
    """Every listing regardless of status, newest first."""
    supabase = get_supabase_client(service_role=True)
    query = supabase.table(PROPERTIES_TABLE).select("*, property_images(*)", count="exact")
    query = apply_equals(
        query,
        status=status,
        approval_status=approval_status,
        property_type=property_type,
        listing_type=listing_type,
        seller_id=seller_id,
    )
    query = apply_range_filters(query, "price", min_price, max_price)
    query = apply_text_search(query, PROPERTY_SEARCH_COLUMNS, search)
    result = (
        query.order("created_at", desc=True)
        .range(offset, offset + limit - 1)
        .execute()
    )
    return result.data, result.count


def get_property_detail(property_id: str) -> dict[str, Any] | None:
    """A listing with its images, seller profile and inquiries."""
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROPERTIES_TABLE)
        .select("*, property_images(*)")
        .eq("id", property_id)
        .limit(1)
        .execute()
    )
    if not result.data:
        return None
    prop = result.data[0]

    seller = (
        supabase.table(PROFILES_TABLE)
        .select("id, user_id, email, full_name, phone, company_name, verification_status")
        .eq("user_id", str(prop.get("seller_id")))
        .limit(1)
        .execute()
    )
    inquiries = (
        supabase.table(INQUIRIES_TABLE)
        .select("*")
        .eq("property_id", property_id)
        .order("created_at", desc=True)
        .execute()
    )
    return {
        **prop,
        "seller": seller.data[0] if seller.data else None,
        "inquiries": inquiries.data,
    }


def update_property(
    row: dict[str, Any],
    changes: dict[str, Any],
    admin_id: str,
) -> dict[str, Any] | None:
    """Partial update by an admin. `mark_sold` moves an active listing to sold."""
    changes = dict(changes)
    if changes.pop("mark_sold", False):
        ensure_transition("property", row.get("status"), PropertyStatus.SOLD)
        changes["status"] = PropertyStatus.SOLD.value

    property_id = str(row["id"])
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROPERTIES_TABLE)
        .update({**changes, "updated_at": _now()})
        .eq("id", property_id)
        .execute()
    )
    featured_cache.clear()
    admin_stats_cache.clear()
    activity_service.track_event(
        "admin_property_update",
        user_id=admin_id,
        property_id=property_id,
        metadata={"fields": sorted(changes)},
    )
    activity_service.log_admin_action(
        admin_id, "update_property", PROPERTIES_TABLE, property_id, {"fields": sorted(changes)}
    )
    return result.data[0] if result.data else None


def archive_property(row: dict[str, Any], admin_id: str) -> dict[str, Any] | None:
    """Soft-delete from the admin console; same transition rule as owners."""
    archived = property_service.archive_property(row, admin_id)
    admin_stats_cache.clear()
    activity_service.track_event(
        "admin_property_archive", user_id=admin_id, property_id=str(row["id"])
    )
    activity_service.log_admin_action(admin_id, "archive_property", PROPERTIES_TABLE, str(row["id"]))
    return archived


def review_property(
    row: dict[str, Any],
    *,
    action: str,
    admin_id: str,
    reason: str | None = None,
) -> dict[str, Any]:
    """Approve (goes live) or reject (archived) a listing awaiting moderation."""
    current = row.get("approval_status") or ApprovalStatus.PENDING.value
    status = row.get("status") or PropertyStatus.PENDING.value
    if action == "approve":
        ensure_transition("approval", current, ApprovalStatus.APPROVED)
        ensure_transition("property", status, PropertyStatus.ACTIVE)
        update: dict[str, Any] = {
            "status": PropertyStatus.ACTIVE.value,
            "approval_status": ApprovalStatus.APPROVED.value,
            "approved_at": _now(),
            "approved_by": admin_id,
            "rejection_reason": None,
        }
    else:
        ensure_transition("approval", current, ApprovalStatus.REJECTED)
        ensure_transition("property", status, PropertyStatus.ARCHIVED)
        update = {
            "status": PropertyStatus.ARCHIVED.value,
            "approval_status": ApprovalStatus.REJECTED.value,
            "rejection_reason": reason,
        }
    update["updated_at"] = _now()

    property_id = str(row["id"])
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROPERTIES_TABLE)
        .update(update)
        .eq("id", property_id)
        .execute()
    )
    featured_cache.clear()
    admin_stats_cache.clear()
    activity_service.log_admin_action(
        admin_id, f"property_{action}", PROPERTIES_TABLE, property_id, {"reason": reason}
    )
    return result.data[0] if result.data else {**row, **update}


# ---------------------------------------------------------------------------
# Users & stats
# ---------------------------------------------------------------------------

def list_users(
    *,
    role: str | None = None,
    search: str | None = None,
    offset: int = 0,
    limit: int = 20,
) -> tuple[list[dict[str, Any]], int | None]:
    supabase = get_supabase_client(service_role=True)
    query = supabase.table(PROFILES_TABLE).select("*", count="exact")
    query = apply_equals(query, user_role=role)
    query = apply_text_search(query, USER_SEARCH_COLUMNS, search)
    result = (
        query.order("created_at", desc=True)
        .range(offset, offset + limit - 1)
        .execute()
    )
    return result.data, result.count


def get_user(profile_id: str) -> dict[str, Any] | None:
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROFILES_TABLE)
        .select("*")
        .eq("id", profile_id)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def change_role(profile: dict[str, Any], role: Role, admin_id: str) -> dict[str, Any] | None:
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROFILES_TABLE)
        .update({"user_role": role.value, "updated_at": _now()})
        .eq("id", str(profile["id"]))
        .execute()
    )
    admin_stats_cache.clear()
    activity_service.log_admin_action(
        admin_id,
        "change_user_role",
        PROFILES_TABLE,
        str(profile["id"]),
        {"from": profile.get("user_role"), "to": role.value},
    )
    return result.data[0] if result.data else None


def _count(table: str, **filters: Any) -> int:
    supabase = get_supabase_client(service_role=True)
    query = apply_equals(supabase.table(table).select("id", count="exact"), **filters)
    return query.limit(1).execute().count or 0


def platform_stats() -> dict[str, int]:
    def _load() -> dict[str, int]:
        return {
            "total_users": _count(PROFILES_TABLE),
            "total_agents": _count(PROFILES_TABLE, user_role=Role.AGENT),
            "verified_agents": _count(
                PROFILES_TABLE, user_role=Role.AGENT, verification_status=VerificationStatus.VERIFIED
            ),
            "pending_verifications": _count(
                PROFILES_TABLE, user_role=Role.AGENT, verification_status=VerificationStatus.PENDING
            ),
            "total_properties": _count(PROPERTIES_TABLE),
            "active_properties": _count(PROPERTIES_TABLE, status=PropertyStatus.ACTIVE),
            "pending_approvals": _count(PROPERTIES_TABLE, approval_status=ApprovalStatus.PENDING),
            "total_inquiries": _count(INQUIRIES_TABLE),
        }

    return admin_stats_cache.get_or_load("stats", _load)
