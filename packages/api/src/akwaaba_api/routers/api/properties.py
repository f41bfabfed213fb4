"""Public listing endpoints and owner-side listing management."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from akwaaba_shared.constants import ListingType, PropertyStatus, PropertyType

from akwaaba_api.dependencies import (
    AuthUser,
    PaginationParams,
    get_current_user,
    require_auth,
    require_seller,
)
from akwaaba_api.responses import wrap_response
from akwaaba_api.schemas.property import (
    ROOMS_REQUIRED,
    PropertyCreate,
    PropertyUpdate,
    missing_rooms,
)
from akwaaba_api.services import property_service, storage_service
from akwaaba_api.utils.pagination import build_links

router = APIRouter(prefix="/properties", tags=["properties"])

NOT_OWNER = "You do not have permission to modify this property"


def _owned_property(property_id: UUID, user: AuthUser) -> dict:
    row = property_service.get_property(str(property_id))
    if row is None:
        raise HTTPException(status_code=404, detail="Property not found")
    if not user.is_admin and str(row.get("seller_id")) != user.user_id:
        raise HTTPException(status_code=403, detail=NOT_OWNER)
    return row


@router.get("")
async def list_properties(
    pagination: PaginationParams = Depends(),
    property_type: PropertyType | None = Query(None),
    listing_type: ListingType | None = Query(None),
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
    city: str | None = Query(None),
    bedrooms: int | None = Query(None, ge=0),
    bathrooms: int | None = Query(None, ge=0),
    search: str | None = Query(None),
):
    data, total = property_service.list_active(
        property_type=property_type,
        listing_type=listing_type,
        min_price=min_price,
        max_price=max_price,
        city=city,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        search=search,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    links = build_links(
        "/api/properties",
        {
            "property_type": property_type, "listing_type": listing_type,
            "min_price": min_price, "max_price": max_price, "city": city,
            "bedrooms": bedrooms, "bathrooms": bathrooms, "search": search,
        },
        pagination.page,
        pagination.limit,
        total,
    )
    return wrap_response(data, pagination=pagination.meta(total), links=links)


@router.get("/featured")
async def featured_properties(limit: int = Query(6, ge=1, le=24)):
    return wrap_response(property_service.list_featured(limit))


@router.get("/my-properties")
async def my_properties(
    pagination: PaginationParams = Depends(),
    status: PropertyStatus | None = Query(None),
    user: AuthUser = Depends(require_seller),
):
    data, total = property_service.list_for_seller(
        user.user_id,
        status=status,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    return wrap_response(data, pagination=pagination.meta(total))


@router.post("", status_code=201)
async def create_property(body: PropertyCreate, user: AuthUser = Depends(require_seller)):
    if user.is_agent and not user.is_verified:
        raise HTTPException(
            status_code=403,
            detail="Agent verification required before listing properties",
        )
    created = property_service.create_property(user.user_id, body, allow_featured=user.is_admin)
    return wrap_response(
        created,
        message="Property created successfully and submitted for approval",
    )


@router.get("/{property_id}")
async def get_property(
    property_id: UUID,
    user: AuthUser | None = Depends(get_current_user),
):
    row = property_service.get_property(str(property_id))
    if row is None:
        raise HTTPException(status_code=404, detail="Property not found")

    privileged = user is not None and (user.is_admin or str(row.get("seller_id")) == user.user_id)
    if row.get("status") != PropertyStatus.ACTIVE.value and not privileged:
        raise HTTPException(status_code=404, detail="Property not found")

    if user is not None:
        property_service.record_view(row, user.user_id)
    return wrap_response(row)


@router.put("/{property_id}")
async def update_property(
    property_id: UUID,
    body: PropertyUpdate,
    user: AuthUser = Depends(require_auth()),
):
    row = _owned_property(property_id, user)
    changes = body.changes()
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")
    if missing_rooms({**row, **changes}):
        raise HTTPException(status_code=400, detail=ROOMS_REQUIRED)
    updated = property_service.update_property(str(property_id), changes)
    if updated is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return wrap_response(updated, message="Property updated successfully")


@router.delete("/{property_id}")
async def archive_property(property_id: UUID, user: AuthUser = Depends(require_auth())):
    row = _owned_property(property_id, user)
    archived = property_service.archive_property(row, user.user_id)
    return wrap_response(archived or {"id": str(property_id)}, message="Property archived successfully")


@router.post("/{property_id}/images", status_code=201)
async def upload_property_image(
    property_id: UUID,
    file: UploadFile = File(...),
    is_primary: bool = Form(False),
    caption: str | None = Form(None),
    alt_text: str | None = Form(None),
    user: AuthUser = Depends(require_auth()),
):
    _owned_property(property_id, user)
    try:
        payload, content_type = await storage_service.read_image(file)
    except storage_service.UploadRejected as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    image = property_service.add_image(
        str(property_id),
        payload,
        content_type,
        is_primary=is_primary,
        caption=caption,
        alt_text=alt_text,
    )
    return wrap_response(image, message="Image uploaded successfully")
