"""Public agent directory."""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from akwaaba_api.dependencies import PaginationParams
from akwaaba_api.responses import wrap_response
from akwaaba_api.services import agent_service
from akwaaba_api.utils.pagination import build_links

router = APIRouter(prefix="/agents", tags=["agents"])


@router.get("/search")
async def search_agents(
    pagination: PaginationParams = Depends(),
    query: str | None = Query(None),
    city: str | None = Query(None),
    region: str | None = Query(None),
    sort_by: Literal["full_name", "experience_years", "created_at", "company_name"] = Query("created_at"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
):
    data, total = agent_service.search_agents(
        query=query,
        city=city,
        region=region,
        sort_by=sort_by,
        sort_order=sort_order,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    links = build_links(
        "/api/agents/search",
        {"query": query, "city": city, "region": region, "sort_by": sort_by, "sort_order": sort_order},
        pagination.page,
        pagination.limit,
        total,
    )
    return wrap_response(data, pagination=pagination.meta(total), links=links)


@router.get("/{agent_id}")
async def get_agent(agent_id: UUID):
    agent = agent_service.get_public_agent(str(agent_id))
    if agent is None:
        raise HTTPException(status_code=404, detail="Agent not found")
    return wrap_response(agent)
