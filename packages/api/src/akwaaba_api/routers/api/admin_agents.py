"""Admin agent listing and verification."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from akwaaba_shared.constants import VerificationStatus

from akwaaba_api.dependencies import AuthUser, PaginationParams, require_admin
from akwaaba_api.responses import wrap_response
from akwaaba_api.schemas.profile import AgentVerification
from akwaaba_api.services import admin_service
from akwaaba_api.utils.export import csv_response
from akwaaba_api.utils.pagination import build_links

router = APIRouter(prefix="/admin/agents", tags=["admin"])

PAST_TENSE = {"approve": "approved", "reject": "rejected"}


@router.get("")
async def list_agents(
    pagination: PaginationParams = Depends(),
    verification_status: VerificationStatus | None = Query(None),
    search: str | None = Query(None),
    format: Literal["json", "csv"] = Query("json"),
    admin: AuthUser = Depends(require_admin()),
):
    data, total = admin_service.list_agents(
        verification_status=verification_status,
        search=search,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    if format == "csv":
        return csv_response(data, "agents.csv")
    links = build_links(
        "/api/admin/agents",
        {
            "verification_status": verification_status.value if verification_status else None,
            "search": search,
        },
        pagination.page,
        pagination.limit,
        total,
    )
    return wrap_response(data, pagination=pagination.meta(total), links=links)


@router.get("/pending")
async def pending_agents(
    pagination: PaginationParams = Depends(),
    search: str | None = Query(None),
    admin: AuthUser = Depends(require_admin()),
):
    data, total = admin_service.list_agents(
        verification_status=VerificationStatus.PENDING,
        search=search,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    return wrap_response(data, pagination=pagination.meta(total))


@router.post("/verify")
async def verify_agent(body: AgentVerification, admin: AuthUser = Depends(require_admin())):
    agent = admin_service.get_agent(str(body.agentId))
    if agent is None:
        raise HTTPException(status_code=404, detail="Agent not found")

    updated = admin_service.verify_agent(
        agent,
        action=body.action,
        admin_id=admin.user_id,
        reason=body.reason,
        admin_notes=body.adminNotes,
    )
    return wrap_response(updated, message=f"Agent {PAST_TENSE[body.action]} successfully")
