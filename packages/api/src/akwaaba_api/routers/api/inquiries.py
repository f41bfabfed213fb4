"""Buyer inquiry submission."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from akwaaba_shared.constants import PropertyStatus

from akwaaba_api.dependencies import AuthUser, get_current_user
from akwaaba_api.middleware.rate_limit import client_ip
from akwaaba_api.responses import wrap_response
from akwaaba_api.schemas.inquiry import InquiryCreate
from akwaaba_api.services import inquiry_service, property_service

router = APIRouter(prefix="/inquiries", tags=["inquiries"])


@router.post("", status_code=201)
async def create_inquiry(
    body: InquiryCreate,
    request: Request,
    user: AuthUser | None = Depends(get_current_user),
):
    prop = property_service.get_property(str(body.property_id))
    if prop is None or prop.get("status") != PropertyStatus.ACTIVE.value:
        raise HTTPException(status_code=404, detail="Property not found")

    inquiry = inquiry_service.create_inquiry(
        body,
        profile_id=user.profile_id if user else None,
        user_id=user.user_id if user else None,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    return wrap_response(inquiry, message="Inquiry submitted successfully")
