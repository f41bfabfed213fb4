"""Admin dashboard stats, analytics, user roles and system configuration."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response

from akwaaba_shared.constants import SYSTEM_CONFIG_TABLE, AnalyticsRange, ConfigCategory, Role

from akwaaba_api.dependencies import AuthUser, PaginationParams, require_admin
from akwaaba_api.responses import wrap_response
from akwaaba_api.schemas.profile import RoleChange
from akwaaba_api.schemas.system import ConfigUpsert
from akwaaba_api.services import activity_service, admin_service, analytics_service, config_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats")
async def stats(admin: AuthUser = Depends(require_admin())):
    return wrap_response(admin_service.platform_stats())


@router.get("/analytics")
async def analytics(
    time_range: AnalyticsRange = Query("6m", alias="timeRange"),
    admin: AuthUser = Depends(require_admin()),
):
    return wrap_response(analytics_service.admin_analytics(time_range))


@router.get("/users")
async def list_users(
    pagination: PaginationParams = Depends(),
    role: Role | None = Query(None),
    search: str | None = Query(None),
    admin: AuthUser = Depends(require_admin()),
):
    data, total = admin_service.list_users(
        role=role,
        search=search,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    return wrap_response(data, pagination=pagination.meta(total))


@router.patch("/users/{profile_id}")
async def change_user_role(
    profile_id: UUID,
    body: RoleChange,
    admin: AuthUser = Depends(require_admin()),
):
    profile = admin_service.get_user(str(profile_id))
    if profile is None:
        raise HTTPException(status_code=404, detail="User not found")
    if str(profile.get("user_id")) == admin.user_id and body.user_role is not Role.ADMIN:
        raise HTTPException(status_code=403, detail="Admins cannot remove their own admin role")
    updated = admin_service.change_role(profile, body.user_role, admin.user_id)
    return wrap_response(updated or {**profile, "user_role": body.user_role.value},
                         message="User updated successfully")


# ---------------------------------------------------------------------------
# System configuration
# ---------------------------------------------------------------------------

@router.get("/system/config")
async def get_config(
    category: ConfigCategory | None = Query(None),
    key: str | None = Query(None),
    include_public: bool = Query(True),
    admin: AuthUser = Depends(require_admin()),
):
    data = config_service.list_config(category=category, key=key, include_public=include_public)
    activity_service.log_admin_action(
        admin.user_id,
        "view_system_config",
        SYSTEM_CONFIG_TABLE,
        metadata={"category": category, "key": key, "include_public": include_public},
    )
    return wrap_response(data)


@router.post("/system/config")
async def upsert_config(
    body: ConfigUpsert,
    response: Response,
    admin: AuthUser = Depends(require_admin()),
):
    row, created = config_service.upsert_config(body, admin.user_id)
    response.status_code = 201 if created else 200
    activity_service.log_admin_action(
        admin.user_id,
        "create_system_config" if created else "update_system_config",
        SYSTEM_CONFIG_TABLE,
        metadata={"category": body.category, "key": body.key},
    )
    return wrap_response(
        row,
        message=f"Configuration {'created' if created else 'updated'} successfully",
    )


@router.put("/system/config")
async def bulk_upsert_config(
    body: list[ConfigUpsert] = Body(..., min_length=1),
    admin: AuthUser = Depends(require_admin()),
):
    summary = config_service.bulk_upsert(body, admin.user_id)
    activity_service.log_admin_action(
        admin.user_id,
        "bulk_update_system_config",
        SYSTEM_CONFIG_TABLE,
        metadata=summary["summary"],
    )
    return wrap_response(summary, message=f"Processed {len(body)} configurations")


@router.delete("/system/config")
async def delete_config(
    category: ConfigCategory = Query(...),
    key: str = Query(..., min_length=1),
    admin: AuthUser = Depends(require_admin()),
):
    if not config_service.delete_config(category, key):
        raise HTTPException(status_code=404, detail="Configuration not found")
    activity_service.log_admin_action(
        admin.user_id,
        "delete_system_config",
        SYSTEM_CONFIG_TABLE,
        metadata={"category": category, "key": key},
    )
    return {"message": "Configuration deleted successfully"}
