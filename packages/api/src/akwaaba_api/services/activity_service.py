"""Best-effort analytics and admin audit rows.

Neither write may fail the request that triggered it: errors are logged at
warning level and swallowed here, and only here.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import structlog
from postgrest.exceptions import APIError

from akwaaba_shared.constants import ADMIN_LOGS_TABLE, ANALYTICS_TABLE
from akwaaba_shared.db import get_supabase_client
from akwaaba_shared.models import AdminLog, AnalyticsEvent

logger = structlog.get_logger(__name__)


def track_event(
    event_type: str,
    *,
    user_id: str | None = None,
    property_id: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> None:
    event = AnalyticsEvent(
        event_type=event_type,
        user_id=UUID(user_id) if user_id else None,
        property_id=UUID(property_id) if property_id else None,
        metadata=metadata or {},
    )
    try:
        supabase = get_supabase_client(service_role=True)
        supabase.table(ANALYTICS_TABLE).insert(event.to_insert_dict()).execute()
    except APIError as exc:
        logger.warning("analytics_write_failed", event_type=event_type, error=exc.message)


def log_admin_action(
    admin_id: str,
    action: str,
    resource: str,
    resource_id: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> None:
    entry = AdminLog(
        admin_id=UUID(admin_id),
        action=action,
        resource=resource,
        resource_id=resource_id,
        metadata=metadata or {},
        timestamp=datetime.now(timezone.utc),
    )
    try:
        supabase = get_supabase_client(service_role=True)
        supabase.table(ADMIN_LOGS_TABLE).insert(entry.to_insert_dict()).execute()
    except APIError as exc:
        logger.warning("admin_log_write_failed", action=action, error=exc.message)
    else:
        logger.info("admin_action", admin_id=admin_id, action=action, resource=resource,
                    resource_id=resource_id)
