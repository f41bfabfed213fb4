"""Self-service profile reads, edits, completion and image updates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import structlog

from akwaaba_shared.constants import (
    PROFILE_FIELD_LABELS,
    PROFILE_REQUIRED_FIELDS,
    PROFILES_TABLE,
    Role,
    VerificationStatus,
)
from akwaaba_shared.db import get_supabase_client
from akwaaba_shared.models import Profile

from akwaaba_api.services import storage_service

logger = structlog.get_logger(__name__)

PUBLIC_PROFILE_FIELDS = (
    "id", "user_id", "email", "full_name", "phone", "company_name", "license_number",
    "specializations", "experience_years", "bio", "profile_image", "cover_image",
    "address", "city", "region", "user_role", "verification_status", "is_verified",
    "profile_completed", "created_at", "updated_at",
)

IMAGE_FIELDS = frozenset({"profile_image", "cover_image"})


@dataclass
class CompletionStatus:
    isComplete: bool
    missingFields: list[str] = field(default_factory=list)
    completionPercentage: int = 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "isComplete": self.isComplete,
            "missingFields": self.missingFields,
            "missingFieldLabels": [PROFILE_FIELD_LABELS.get(f, f) for f in self.missingFields],
            "completionPercentage": self.completionPercentage,
        }


def _is_filled(name: str, value: Any) -> bool:
    if name == "specializations":
        return isinstance(value, list) and len(value) > 0
    if name == "experience_years":
        return value is not None and value != 0
    return isinstance(value, str) and value.strip() != ""


def compute_completion(profile: dict[str, Any] | None) -> CompletionStatus:
    """Score a profile row against the fixed required-field list."""
    if not profile:
        return CompletionStatus(isComplete=False, missingFields=["profile"])

    missing = [f for f in PROFILE_REQUIRED_FIELDS if not _is_filled(f, profile.get(f))]
    completed = len(PROFILE_REQUIRED_FIELDS) - len(missing)
    # Python's round() is banker's rounding; completion percentages use half-up.
    percentage = int(completed / len(PROFILE_REQUIRED_FIELDS) * 100 + 0.5)
    return CompletionStatus(
        isComplete=not missing,
        missingFields=missing,
        completionPercentage=percentage,
    )


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def public_view(row: dict[str, Any]) -> dict[str, Any]:
    return {k: row.get(k) for k in PUBLIC_PROFILE_FIELDS if k in row}


def get_profile(user_id: str) -> dict[str, Any] | None:
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROFILES_TABLE)
        .select("*")
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def create_profile(
    user_id: str,
    email: str,
    *,
    role: Role = Role.CUSTOMER,
    **fields: Any,
) -> dict[str, Any]:
    """Insert a new profile row. New profiles always start unverified."""
    profile = Profile(
        user_id=UUID(user_id),
        email=email,
        user_role=role,
        verification_status=VerificationStatus.PENDING,
        is_verified=False,
        **fields,
    )
    supabase = get_supabase_client(service_role=True)
    result = supabase.table(PROFILES_TABLE).insert(profile.to_insert_dict()).execute()
    logger.info("profile_created", user_id=user_id, role=role.value)
    return result.data[0] if result.data else profile.to_insert_dict()


def update_own_profile(user_id: str, email: str | None, changes: dict[str, Any]) -> dict[str, Any]:
    """Apply a self-service edit, creating the profile row on first save.

    Role and verification columns are never writable from here.
    """
    existing = get_profile(user_id)
    if existing is None:
        completed = compute_completion(changes).isComplete
        return create_profile(user_id, email or "", profile_completed=completed, **changes)

    merged = {**existing, **changes}
    update = {**changes, "updated_at": _now()}
    if compute_completion(merged).isComplete and not existing.get("profile_completed"):
        update["profile_completed"] = True

    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(PROFILES_TABLE)
        .update(update)
        .eq("user_id", user_id)
        .execute()
    )
    logger.info("profile_updated", user_id=user_id, fields=sorted(changes))
    return result.data[0] if result.data else merged | update


def replace_image(user_id: str, column: str, payload: bytes, content_type: str, bucket: str) -> dict[str, Any]:
    """Upload an image, then point the profile column at its public URL.

    If the row update fails the stored object is removed before re-raising.
    """
    if column not in IMAGE_FIELDS:
        raise ValueError(f"Unsupported profile image column: {column}")

    path = storage_service.object_path(f"{user_id}/{column}", content_type)
    stored = storage_service.upload(bucket, path, payload, content_type)

    supabase = get_supabase_client(service_role=True)
    try:
        result = (
            supabase.table(PROFILES_TABLE)
            .update({column: stored.public_url, "updated_at": _now()})
            .eq("user_id", user_id)
            .execute()
        )
    except Exception:
        storage_service.remove(stored)
        raise
    if not result.data:
        storage_service.remove(stored)
        return {}
    return {column: stored.public_url, "storage_path": stored.path, "profile": public_view(result.data[0])}
