"""Admin listing moderation."""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from akwaaba_shared.constants import ApprovalStatus, ListingType, PropertyStatus, PropertyType

from akwaaba_api.dependencies import AuthUser, PaginationParams, require_admin
from akwaaba_api.responses import wrap_response
from akwaaba_api.schemas.property import (
    ROOMS_REQUIRED,
    AdminPropertyUpdate,
    PropertyApproval,
    missing_rooms,
)
from akwaaba_api.services import admin_service, property_service
from akwaaba_api.utils.export import csv_response
from akwaaba_api.utils.pagination import build_links

router = APIRouter(prefix="/admin/properties", tags=["admin"])

PAST_TENSE = {"approve": "approved", "reject": "rejected"}


def _existing(property_id: UUID) -> dict:
    row = property_service.get_property(str(property_id))
    if row is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return row


@router.get("")
async def list_properties(
    pagination: PaginationParams = Depends(),
    status: PropertyStatus | None = Query(None),
    approval_status: ApprovalStatus | None = Query(None),
    property_type: PropertyType | None = Query(None),
    listing_type: ListingType | None = Query(None),
    seller_id: UUID | None = Query(None),
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
    search: str | None = Query(None),
    format: Literal["json", "csv"] = Query("json"),
    admin: AuthUser = Depends(require_admin()),
):
    data, total = admin_service.list_properties(
        status=status,
        approval_status=approval_status,
        property_type=property_type,
        listing_type=listing_type,
        seller_id=str(seller_id) if seller_id else None,
        min_price=min_price,
        max_price=max_price,
        search=search,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    if format == "csv":
        return csv_response(
            [{k: v for k, v in row.items() if k != "property_images"} for row in data],
            "properties.csv",
        )
    links = build_links(
        "/api/admin/properties",
        {
            "status": status.value if status else None,
            "approval_status": approval_status.value if approval_status else None,
            "property_type": property_type,
            "listing_type": listing_type,
            "search": search,
        },
        pagination.page,
        pagination.limit,
        total,
    )
    return wrap_response(data, pagination=pagination.meta(total), links=links)


@router.post("/approve")
async def review_property(body: PropertyApproval, admin: AuthUser = Depends(require_admin())):
    row = _existing(body.propertyId)
    updated = admin_service.review_property(
        row,
        action=body.action,
        admin_id=admin.user_id,
        reason=body.reason,
    )
    return wrap_response(updated, message=f"Property {PAST_TENSE[body.action]} successfully")


@router.get("/{property_id}")
async def get_property(property_id: UUID, admin: AuthUser = Depends(require_admin())):
    detail = admin_service.get_property_detail(str(property_id))
    if detail is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return wrap_response(detail)


@router.put("/{property_id}")
async def update_property(
    property_id: UUID,
    body: AdminPropertyUpdate,
    admin: AuthUser = Depends(require_admin()),
):
    row = _existing(property_id)
    changes = body.changes()
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")
    if missing_rooms({**row, **changes}):
        raise HTTPException(status_code=400, detail=ROOMS_REQUIRED)
    updated = admin_service.update_property(row, changes, admin.user_id)
    if updated is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return wrap_response(updated, message="Property updated successfully")


@router.delete("/{property_id}")
async def archive_property(property_id: UUID, admin: AuthUser = Depends(require_admin())):
    row = _existing(property_id)
    archived = admin_service.archive_property(row, admin.user_id)
    return wrap_response(archived or {"id": str(property_id)}, message="Property archived successfully")
