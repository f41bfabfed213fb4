"""Buyer inquiries and the seller-side inbox."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import structlog

from akwaaba_shared.constants import (
    INQUIRIES_TABLE,
    PROPERTIES_TABLE,
    InquiryStatus,
    PropertyStatus,
)
from akwaaba_shared.db import get_supabase_client
from akwaaba_shared.models import Inquiry

from akwaaba_api.services import activity_service

logger = structlog.get_logger(__name__)

INQUIRY_SELECT = "*, properties(id, title, property_type, listing_type, price, city, seller_id)"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_inquiry(
    payload: Any,
    *,
    profile_id: str | None = None,
    user_id: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> dict[str, Any]:
    inquiry = Inquiry(
        property_id=payload.property_id,
        profile_id=UUID(profile_id) if profile_id else None,
        buyer_name=payload.buyer_name,
        buyer_email=str(payload.buyer_email),
        buyer_phone=payload.buyer_phone,
        message=payload.message,
        inquiry_type=payload.inquiry_type,
        preferred_contact=payload.preferred_contact,
        status=InquiryStatus.PENDING,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    supabase = get_supabase_client(service_role=True)
    result = supabase.table(INQUIRIES_TABLE).insert(inquiry.to_insert_dict()).execute()
    logger.info(
        "inquiry_created",
        inquiry_id=str(inquiry.id),
        property_id=str(inquiry.property_id),
        anonymous=profile_id is None,
    )
    activity_service.track_event(
        "inquiry_created",
        user_id=user_id,
        property_id=str(inquiry.property_id),
        metadata={"inquiry_type": inquiry.inquiry_type},
    )
    return result.data[0] if result.data else inquiry.to_insert_dict()


def _seller_property_ids(seller_id: str) -> list[str]:
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROPERTIES_TABLE)
        .select("id")
        .eq("seller_id", seller_id)
        .execute()
    )
    return [str(r["id"]) for r in result.data]


def list_for_seller(
    seller_id: str | None,
    *,
    status: str | None = None,
    property_id: str | None = None,
    offset: int = 0,
    limit: int = 20,
) -> tuple[list[dict[str, Any]], int]:
    """Inquiries on the seller's listings; `seller_id=None` means every listing."""
    property_ids: list[str] | None = None
    if seller_id is not None:
        property_ids = _seller_property_ids(seller_id)
        if not property_ids:
            return [], 0

    supabase = get_supabase_client(service_role=True)
    query = supabase.table(INQUIRIES_TABLE).select(INQUIRY_SELECT, count="exact")
    if property_ids is not None:
        query = query.in_("property_id", property_ids)
    if status:
        query = query.eq("status", status)
    if property_id:
        query = query.eq("property_id", property_id)
    result = (
        query.order("created_at", desc=True)
        .range(offset, offset + limit - 1)
        .execute()
    )
    return result.data, result.count or 0


def get_inquiry(inquiry_id: str) -> dict[str, Any] | None:
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(INQUIRIES_TABLE)
        .select(INQUIRY_SELECT)
        .eq("id", inquiry_id)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def owner_of(inquiry: dict[str, Any]) -> str | None:
    prop = inquiry.get("properties") or {}
    seller_id = prop.get("seller_id")
    return str(seller_id) if seller_id else None


def update_inquiry(inquiry_id: str, changes: dict[str, Any]) -> dict[str, Any] | None:
    """Apply a seller's update. Moving to `responded` stamps `responded_at`."""
    update = {**changes, "updated_at": _now()}
    if changes.get("status") == InquiryStatus.RESPONDED.value:
        update["responded_at"] = _now()
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(INQUIRIES_TABLE)
        .update(update)
        .eq("id", inquiry_id)
        .execute()
    )
    logger.info("inquiry_updated", inquiry_id=inquiry_id, fields=sorted(changes))
    return result.data[0] if result.data else None


def seller_dashboard(seller_id: str) -> dict[str, Any]:
    """Listing counts per status, total views and inquiry counts per status."""
    supabase = get_supabase_client(service_role=True)
    listings = (
        supabase.table(PROPERTIES_TABLE)
        .select("id, status, views_count")
        .eq("seller_id", seller_id)
        .execute()
    ).data

    by_status = Counter(r.get("status") for r in listings)
    properties = {s.value: by_status.get(s.value, 0) for s in PropertyStatus}
    properties["total"] = len(listings)

    inquiries: dict[str, int] = {s.value: 0 for s in InquiryStatus}
    inquiries["total"] = 0
    recent: list[dict[str, Any]] = []
    property_ids = [str(r["id"]) for r in listings]
    if property_ids:
        rows = (
            supabase.table(INQUIRIES_TABLE)
            .select("id, property_id, buyer_name, status, created_at")
            .in_("property_id", property_ids)
            .order("created_at", desc=True)
            .execute()
        ).data
        for status, n in Counter(r.get("status") for r in rows).items():
            if status in inquiries:
                inquiries[status] = n
        inquiries["total"] = len(rows)
        recent = rows[:5]

    return {
        "properties": properties,
        "total_views": sum(int(r.get("views_count") or 0) for r in listings),
        "inquiries": inquiries,
        "recent_inquiries": recent,
    }
