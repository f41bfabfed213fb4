"""Admin-tunable system configuration stored in `system_config`."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import structlog
from postgrest.exceptions import APIError

from akwaaba_shared.constants import SYSTEM_CONFIG_TABLE
from akwaaba_shared.db import get_supabase_client
from akwaaba_shared.models import SystemConfig

logger = structlog.get_logger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _decode(row: dict[str, Any]) -> dict[str, Any]:
    return SystemConfig.from_db_row(row).model_dump(mode="json")


def list_config(
    *,
    category: str | None = None,
    key: str | None = None,
    include_public: bool = True,
) -> dict[str, Any]:
    """Config rows grouped by category."""
    supabase = get_supabase_client(service_role=True)
    query = supabase.table(SYSTEM_CONFIG_TABLE).select("*").order("category").order("key")
    if category:
        query = query.eq("category", category)
    if key:
        query = query.eq("key", key)
    if not include_public:
        query = query.eq("is_public", False)
    rows = query.execute().data

    grouped: dict[str, list[dict[str, Any]]] = {}
    for row in rows:
        grouped.setdefault(row["category"], []).append(_decode(row))
    return {"configurations": grouped, "total_count": len(rows)}


def _find(category: str, key: str) -> dict[str, Any] | None:
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(SYSTEM_CONFIG_TABLE)
        .select("id")
        .eq("category", category)
        .eq("key", key)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def upsert_config(item: Any, admin_id: str) -> tuple[dict[str, Any], bool]:
    """Create or update one entry. Returns `(row, created)`."""
    supabase = get_supabase_client(service_role=True)
    existing = _find(item.category, item.key)
    if existing:
        result = (
            supabase.table(SYSTEM_CONFIG_TABLE)
            .update({
                "value": json.dumps(item.value),
                "description": item.description,
                "is_public": item.is_public,
                "updated_by": admin_id,
                "updated_at": _now(),
            })
            .eq("id", existing["id"])
            .execute()
        )
        created = False
    else:
        entry = SystemConfig(
            category=item.category,
            key=item.key,
            value=item.value,
            description=item.description,
            is_public=item.is_public,
            created_by=UUID(admin_id),
            updated_by=UUID(admin_id),
        )
        result = supabase.table(SYSTEM_CONFIG_TABLE).insert(entry.to_insert_dict()).execute()
        created = True

    row = _decode(result.data[0]) if result.data else item.model_dump(mode="json")
    logger.info("config_saved", category=item.category, key=item.key, created=created)
    return row, created


def bulk_upsert(items: list[Any], admin_id: str) -> dict[str, Any]:
    """Upsert each entry independently; one failure does not stop the rest."""
    results: list[dict[str, Any]] = []
    errors: list[dict[str, Any]] = []
    for item in items:
        try:
            row, created = upsert_config(item, admin_id)
        except APIError as exc:
            logger.warning("config_bulk_item_failed", category=item.category, key=item.key,
                           error=exc.message)
            errors.append({"category": item.category, "key": item.key, "error": exc.message})
            continue
        results.append({
            "category": item.category,
            "key": item.key,
            "action": "created" if created else "updated",
            "data": row,
        })
    return {
        "results": results,
        "errors": errors,
        "summary": {"total": len(items), "successful": len(results), "failed": len(errors)},
    }


def delete_config(category: str, key: str) -> bool:
    """Delete one entry; False when it does not exist."""
    existing = _find(category, key)
    if existing is None:
        return False
    supabase = get_supabase_client(service_role=True)
    supabase.table(SYSTEM_CONFIG_TABLE).delete().eq("id", existing["id"]).execute()
    logger.info("config_deleted", category=category, key=key)
    return True
