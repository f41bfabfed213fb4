"""Listing queries and owner-side mutations."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from uuid import UUID

import structlog
from postgrest.exceptions import APIError

from akwaaba_shared.config import settings
from akwaaba_shared.constants import (
    PROPERTIES_TABLE,
    PROPERTY_IMAGES_TABLE,
    ApprovalStatus,
    PropertyStatus,
)
from akwaaba_shared.db import get_supabase_client
from akwaaba_shared.models import Property, PropertyImage
from akwaaba_shared.workflow import ensure_transition

from akwaaba_api.services import activity_service, storage_service
from akwaaba_api.utils.cache import featured_cache
from akwaaba_api.utils.filtering import (
    apply_equals,
    apply_min_filter,
    apply_range_filters,
    apply_text_search,
)

logger = structlog.get_logger(__name__)

SEARCH_COLUMNS = ("title", "description", "city")
DETAIL_SELECT = "*, property_images(*)"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def list_active(
    *,
    property_type: str | None = None,
    listing_type: str | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    city: str | None = None,
    bedrooms: int | None = None,
    bathrooms: int | None = None,
    search: str | None = None,
    offset: int = 0,
    limit: int = 20,
) -> tuple[list[dict[str, Any]], int | None]:
    supabase = get_supabase_client()
    query = (
        supabase.table(PROPERTIES_TABLE)
        .select(DETAIL_SELECT, count="exact")
        .eq("status", PropertyStatus.ACTIVE.value)
    )
    query = apply_equals(query, property_type=property_type, listing_type=listing_type)
    query = apply_range_filters(query, "price", min_price, max_price)
    query = apply_text_search(query, ("city",), city)
    query = apply_min_filter(query, "bedrooms", bedrooms)
    query = apply_min_filter(query, "bathrooms", bathrooms)
    query = apply_text_search(query, SEARCH_COLUMNS, search)
    result = (
        query.order("created_at", desc=True)
        .range(offset, offset + limit - 1)
        .execute()
    )
    return result.data, result.count


def list_featured(limit: int = 6) -> list[dict[str, Any]]:
    def _load() -> list[dict[str, Any]]:
        supabase = get_supabase_client()
        result = (
            supabase.table(PROPERTIES_TABLE)
            .select(DETAIL_SELECT)
            .eq("status", PropertyStatus.ACTIVE.value)
            .eq("is_featured", True)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return result.data

    return featured_cache.get_or_load(f"featured:{limit}", _load)


def get_property(property_id: str) -> dict[str, Any] | None:
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROPERTIES_TABLE)
        .select(DETAIL_SELECT)
        .eq("id", property_id)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def record_view(row: dict[str, Any], user_id: str) -> None:
    """Count a signed-in view. Failures never fail the page load."""
    property_id = str(row["id"])
    supabase = get_supabase_client(service_role=True)
    try:
        (
            supabase.table(PROPERTIES_TABLE)
            .update({"views_count": int(row.get("views_count") or 0) + 1})
            .eq("id", property_id)
            .execute()
        )
    except APIError as exc:
        logger.warning("view_count_failed", property_id=property_id, error=exc.message)
    activity_service.track_event("property_view", user_id=user_id, property_id=property_id)


def create_property(seller_id: str, payload: Any, *, allow_featured: bool = False) -> dict[str, Any]:
    """Insert a new listing awaiting moderation, plus any image rows.

    Only admins may create a listing that is already featured.
    """
    body = payload.model_dump(mode="json", exclude={"images"})
    if not allow_featured:
        body["is_featured"] = False
    prop = Property(
        seller_id=UUID(seller_id),
        status=PropertyStatus.PENDING,
        approval_status=ApprovalStatus.PENDING,
        **body,
    )
    supabase = get_supabase_client(service_role=True)
    result = supabase.table(PROPERTIES_TABLE).insert(prop.to_insert_dict()).execute()
    created = result.data[0] if result.data else prop.to_insert_dict()

    if payload.images:
        rows = [
            PropertyImage(
                property_id=prop.id,
                image_url=str(img.url),
                image_type=img.image_type,
                is_primary=img.is_primary,
                alt_text=img.alt_text,
                order_index=idx if img.order_index is None else img.order_index,
            ).to_insert_dict()
            for idx, img in enumerate(payload.images)
        ]
        images = supabase.table(PROPERTY_IMAGES_TABLE).insert(rows).execute()
        created = {**created, "property_images": images.data}

    logger.info("property_created", property_id=str(prop.id), seller_id=seller_id)
    activity_service.track_event(
        "property_created", user_id=seller_id, property_id=str(prop.id)
    )
    return created


def update_property(property_id: str, changes: dict[str, Any]) -> dict[str, Any] | None:
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROPERTIES_TABLE)
        .update({**changes, "updated_at": _now()})
        .eq("id", property_id)
        .execute()
    )
    featured_cache.clear()
    return result.data[0] if result.data else None


def archive_property(row: dict[str, Any], actor_id: str) -> dict[str, Any] | None:
    """Soft-delete a listing. Only active or pending listings can be archived."""
    ensure_transition("property", row.get("status"), PropertyStatus.ARCHIVED)
    property_id = str(row["id"])
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROPERTIES_TABLE)
        .update({
            "status": PropertyStatus.ARCHIVED.value,
            "archived_at": _now(),
            "archived_by": actor_id,
            "updated_at": _now(),
        })
        .eq("id", property_id)
        .execute()
    )
    featured_cache.clear()
    logger.info("property_archived", property_id=property_id, actor_id=actor_id)
    return result.data[0] if result.data else None


def list_for_seller(
    seller_id: str,
    *,
    status: str | None = None,
    offset: int = 0,
    limit: int = 20,
) -> tuple[list[dict[str, Any]], int | None]:
    supabase = get_supabase_client(service_role=True)
    query = (
        supabase.table(PROPERTIES_TABLE)
        .select(DETAIL_SELECT, count="exact")
        .eq("seller_id", seller_id)
    )
    query = apply_equals(query, status=status)
    result = (
        query.order("created_at", desc=True)
        .range(offset, offset + limit - 1)
        .execute()
    )
    return result.data, result.count


def add_image(
    property_id: str,
    payload: bytes,
    content_type: str,
    *,
    is_primary: bool = False,
    image_type: str = "gallery",
    caption: str | None = None,
    alt_text: str | None = None,
) -> dict[str, Any]:
    """Store an image and attach it to a listing.

    If the row insert fails the uploaded object is removed before the error
    propagates. A new primary image demotes the previous one only once its
    own row exists.
    """
    path = storage_service.object_path(property_id, content_type)
    stored = storage_service.upload(settings.property_images_bucket, path, payload, content_type)

    supabase = get_supabase_client(service_role=True)
    try:
        existing = (
            supabase.table(PROPERTY_IMAGES_TABLE)
            .select("id", count="exact")
            .eq("property_id", property_id)
            .execute()
        )
        image = PropertyImage(
            property_id=UUID(property_id),
            image_url=stored.public_url,
            storage_path=stored.path,
            image_type="primary" if is_primary else image_type,
            caption=caption,
            alt_text=alt_text,
            is_primary=is_primary,
            order_index=existing.count or 0,
        )
        result = supabase.table(PROPERTY_IMAGES_TABLE).insert(image.to_insert_dict()).execute()
    except Exception:
        storage_service.remove(stored)
        raise

    if is_primary:
        (
            supabase.table(PROPERTY_IMAGES_TABLE)
            .update({"is_primary": False})
            .eq("property_id", property_id)
            .eq("is_primary", True)
            .neq("id", str(image.id))
            .execute()
        )

    featured_cache.clear()
    logger.info("property_image_added", property_id=property_id, path=stored.path)
    return result.data[0] if result.data else image.to_insert_dict()
