"""Seller inbox and dashboard for agents (admins see every listing)."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from akwaaba_shared.constants import InquiryStatus, SellerPeriod

from akwaaba_api.dependencies import AuthUser, PaginationParams, require_seller
from akwaaba_api.responses import wrap_response
from akwaaba_api.schemas.inquiry import InquiryUpdate
from akwaaba_api.services import analytics_service, inquiry_service
from akwaaba_api.utils.pagination import build_links

router = APIRouter(prefix="/seller", tags=["seller"])

OWNERSHIP_DENIED = "Access denied - Property ownership verification failed"


def _owned_inquiry(inquiry_id: UUID, user: AuthUser) -> dict:
    inquiry = inquiry_service.get_inquiry(str(inquiry_id))
    if inquiry is None:
        raise HTTPException(status_code=404, detail="Inquiry not found")
    if not user.is_admin and inquiry_service.owner_of(inquiry) != user.user_id:
        raise HTTPException(status_code=403, detail=OWNERSHIP_DENIED)
    return inquiry


@router.get("/inquiries")
async def list_inquiries(
    pagination: PaginationParams = Depends(),
    status: InquiryStatus | None = Query(None),
    property_id: UUID | None = Query(None),
    user: AuthUser = Depends(require_seller),
):
    data, total = inquiry_service.list_for_seller(
        None if user.is_admin else user.user_id,
        status=status.value if status else None,
        property_id=str(property_id) if property_id else None,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    links = build_links(
        "/api/seller/inquiries",
        {"status": status.value if status else None, "property_id": property_id},
        pagination.page,
        pagination.limit,
        total,
    )
    return wrap_response(data, pagination=pagination.meta(total), links=links)


@router.get("/inquiries/{inquiry_id}")
async def get_inquiry(inquiry_id: UUID, user: AuthUser = Depends(require_seller)):
    return wrap_response(_owned_inquiry(inquiry_id, user))


@router.put("/inquiries/{inquiry_id}")
async def update_inquiry(
    inquiry_id: UUID,
    body: InquiryUpdate,
    user: AuthUser = Depends(require_seller),
):
    _owned_inquiry(inquiry_id, user)
    changes = body.changes()
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")
    updated = inquiry_service.update_inquiry(str(inquiry_id), changes)
    if updated is None:
        raise HTTPException(status_code=404, detail="Inquiry not found")
    return wrap_response(updated, message="Inquiry updated successfully")


@router.get("/dashboard")
async def dashboard(user: AuthUser = Depends(require_seller)):
    return wrap_response(inquiry_service.seller_dashboard(user.user_id))


@router.get("/analytics")
async def analytics(
    period: SellerPeriod = Query("30d"),
    property_id: UUID | None = Query(None),
    user: AuthUser = Depends(require_seller),
):
    return wrap_response(
        analytics_service.seller_analytics(
            user.user_id,
            period=period,
            property_id=str(property_id) if property_id else None,
        )
    )
