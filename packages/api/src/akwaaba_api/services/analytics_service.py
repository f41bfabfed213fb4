"""
Month-by-month platform analytics for admins and period analytics for sellers.

Admin series are bucketed by calendar month of `created_at` with polars; a
month with no rows still appears with zeros, so the chart axis is always
the full window. Seller analytics compare the chosen period against the
period of equal length just before it.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Final

import polars as pl
import structlog
from pydantic import TypeAdapter

from akwaaba_shared.constants import (
    INQUIRIES_TABLE,
    PROFILES_TABLE,
    PROPERTIES_TABLE,
    PropertyStatus,
    Role,
)
from akwaaba_shared.db import get_supabase_client

from akwaaba_api.services import activity_service, admin_service
from akwaaba_api.utils.cache import admin_stats_cache

logger = structlog.get_logger(__name__)

RANGE_MONTHS: Final[dict[str, int]] = {"1m": 1, "3m": 3, "6m": 6, "1y": 12}
PERIOD_DAYS: Final[dict[str, int]] = {"7d": 7, "30d": 30, "90d": 90, "1y": 365}

_timestamp = TypeAdapter(datetime)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse(value: Any) -> datetime | None:
    if value is None:
        return None
    parsed = _timestamp.validate_python(value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def month_labels(months: int, today: date) -> list[str]:
    """`months` consecutive YYYY-MM labels, oldest first, ending at `today`'s month."""
    labels: list[str] = []
    year, month = today.year, today.month
    for _ in range(months):
        labels.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return labels[::-1]


def monthly_rollup(
    rows: list[dict[str, Any]],
    labels: list[str],
    aggs: dict[str, pl.Expr],
) -> pl.DataFrame:
    """Aggregate `rows` per created_at month onto a zero-filled month spine."""
    spine = pl.DataFrame({"month": labels})
    if not rows:
        return spine.with_columns([pl.lit(0, dtype=pl.Int64).alias(name) for name in aggs])

    frame = pl.DataFrame(rows, infer_schema_length=None).with_columns(
        pl.col("created_at").cast(pl.Utf8).str.slice(0, 7).alias("month")
    )
    grouped = frame.group_by("month").agg([expr.alias(name) for name, expr in aggs.items()])
    return (
        spine.join(grouped, on="month", how="left")
        .with_columns([pl.col(name).fill_null(0).cast(pl.Int64) for name in aggs])
        .sort("month")
    )


def admin_analytics(time_range: str = "6m") -> dict[str, Any]:
    """User growth and listing activity per month over the last `time_range`."""

    def _load() -> dict[str, Any]:
        labels = month_labels(RANGE_MONTHS[time_range], _now().date())
        since = f"{labels[0]}-01T00:00:00+00:00"
        supabase = get_supabase_client(service_role=True)

        users = (
            supabase.table(PROFILES_TABLE)
            .select("created_at, user_role")
            .gte("created_at", since)
            .execute()
        ).data
        earlier = (
            supabase.table(PROFILES_TABLE)
            .select("id", count="exact")
            .lt("created_at", since)
            .limit(1)
            .execute()
        ).count or 0
        listings = (
            supabase.table(PROPERTIES_TABLE)
            .select("created_at, status, views_count")
            .gte("created_at", since)
            .execute()
        ).data

        growth = monthly_rollup(
            users,
            labels,
            {
                "new_users": pl.len(),
                "agents": pl.col("user_role").cast(pl.Utf8).eq(Role.AGENT.value).sum(),
            },
        ).with_columns((pl.col("new_users").cum_sum() + earlier).alias("users"))
        metrics = monthly_rollup(
            listings,
            labels,
            {
                "listed": pl.len(),
                "sold": pl.col("status").cast(pl.Utf8).eq(PropertyStatus.SOLD.value).sum(),
                "views": pl.col("views_count").cast(pl.Int64, strict=False).fill_null(0).sum(),
            },
        )
        return {
            "timeRange": time_range,
            "since": since,
            "userGrowth": growth.to_dicts(),
            "propertyMetrics": metrics.to_dicts(),
            "platformStats": admin_service.platform_stats(),
        }

    return admin_stats_cache.get_or_load(f"analytics:{time_range}", _load)


def _change_percent(current: int, previous: int) -> float:
    if previous <= 0:
        return 0.0
    return round((current - previous) / previous * 100, 2)


def _within(row: dict[str, Any], start: datetime, end: datetime) -> bool:
    created = _parse(row.get("created_at"))
    return created is not None and start <= created <= end


def seller_analytics(
    seller_id: str,
    *,
    period: str = "30d",
    property_id: str | None = None,
) -> dict[str, Any]:
    """Listing and inquiry performance for one seller over `period`.

    Listings count toward the period they were created in; inquiries toward
    the period they arrived in. Trends compare against the preceding period.
    """
    end = _now()
    start = end - timedelta(days=PERIOD_DAYS[period])
    previous_start = start - (end - start)

    supabase = get_supabase_client(service_role=True)
    query = (
        supabase.table(PROPERTIES_TABLE)
        .select("id, title, views_count, status, created_at")
        .eq("seller_id", seller_id)
    )
    if property_id:
        query = query.eq("id", property_id)
    listings = query.execute().data

    inquiries: list[dict[str, Any]] = []
    property_ids = [str(r["id"]) for r in listings]
    if property_ids:
        inquiries = (
            supabase.table(INQUIRIES_TABLE)
            .select("id, property_id, status, response_message, created_at")
            .in_("property_id", property_ids)
            .gte("created_at", previous_start.isoformat())
            .lte("created_at", end.isoformat())
            .execute()
        ).data

    current = [r for r in listings if _within(r, start, end)]
    earlier = [r for r in listings if _within(r, previous_start, start) and not _within(r, start, end)]
    current_inquiries = [i for i in inquiries if _within(i, start, end)]
    earlier_inquiries = [
        i for i in inquiries if _within(i, previous_start, start) and not _within(i, start, end)
    ]

    views = sum(int(r.get("views_count") or 0) for r in current)
    previous_views = sum(int(r.get("views_count") or 0) for r in earlier)
    responded = sum(1 for i in current_inquiries if i.get("response_message"))
    response_rate = round(responded / len(current_inquiries) * 100, 2) if current_inquiries else 0.0

    activity_service.track_event(
        "seller_analytics_view",
        user_id=seller_id,
        property_id=property_id,
        metadata={"period": period},
    )
    logger.info("seller_analytics", seller_id=seller_id, period=period, listings=len(current))

    return {
        "period": period,
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "property_id": property_id,
        "overview": {
            "total_properties": len(current),
            "active_properties": sum(
                1 for r in current if r.get("status") == PropertyStatus.ACTIVE.value
            ),
            "total_views": views,
            "total_inquiries": len(current_inquiries),
            "response_rate": response_rate,
        },
        "trends": {
            "views_change_percent": _change_percent(views, previous_views),
            "inquiries_change_percent": _change_percent(
                len(current_inquiries), len(earlier_inquiries)
            ),
        },
        "properties": [
            {
                "id": r["id"],
                "title": r.get("title"),
                "views": int(r.get("views_count") or 0),
                "status": r.get("status"),
                "created_at": r.get("created_at"),
            }
            for r in current
        ],
        "inquiries": [
            {
                "id": i["id"],
                "property_id": i.get("property_id"),
                "status": i.get("status"),
                "responded": bool(i.get("response_message")),
                "created_at": i.get("created_at"),
            }
            for i in current_inquiries
        ],
    }
