"""
models/property.py — Pydantic models for properties and property_images.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from akwaaba_shared.constants import (
    DEFAULT_CURRENCY,
    ApprovalStatus,
    ListingType,
    PropertyStatus,
    PropertyType,
)


class Property(BaseModel):
    """Matches the properties table row."""

    id: UUID = Field(default_factory=uuid4)
    seller_id: UUID
    title: str
    description: str
    property_type: PropertyType
    listing_type: ListingType
    price: Decimal
    currency: str = DEFAULT_CURRENCY
    address: str
    city: str
    region: str
    postal_code: str | None = None
    latitude: Decimal | None = None
    longitude: Decimal | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    square_feet: Decimal | None = None
    land_size: Decimal | None = None
    year_built: int | None = None
    features: list[str] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)
    is_featured: bool = False
    views_count: int = 0
    status: PropertyStatus = PropertyStatus.PENDING
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    rejection_reason: str | None = None
    approved_at: datetime | None = None
    approved_by: UUID | None = None
    archived_at: datetime | None = None
    archived_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "Property":
        data = dict(row)
        for key in ("features", "amenities"):
            if data.get(key) is None:
                data[key] = []
        return cls(**data)

    def to_insert_dict(self) -> dict[str, Any]:
        def _num(v: Decimal | None) -> float | None:
            return float(v) if v is not None else None

        return {
            "id": str(self.id),
            "seller_id": str(self.seller_id),
            "title": self.title,
            "description": self.description,
            "property_type": self.property_type,
            "listing_type": self.listing_type,
            "price": float(self.price),
            "currency": self.currency,
            "address": self.address,
            "city": self.city,
            "region": self.region,
            "postal_code": self.postal_code,
            "latitude": _num(self.latitude),
            "longitude": _num(self.longitude),
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "square_feet": _num(self.square_feet),
            "land_size": _num(self.land_size),
            "year_built": self.year_built,
            "features": self.features,
            "amenities": self.amenities,
            "is_featured": self.is_featured,
            "views_count": self.views_count,
            "status": self.status.value,
            "approval_status": self.approval_status.value,
        }


class PropertyImage(BaseModel):
    """Matches the property_images table row."""

    id: UUID = Field(default_factory=uuid4)
    property_id: UUID
    image_url: str
    storage_path: str | None = None
    image_type: str = "gallery"
    caption: str | None = None
    alt_text: str | None = None
    is_primary: bool = False
    order_index: int = 0
    created_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "PropertyImage":
        return cls(**row)

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "image_url": self.image_url,
            "storage_path": self.storage_path,
            "image_type": self.image_type,
            "caption": self.caption,
            "alt_text": self.alt_text,
            "is_primary": self.is_primary,
            "order_index": self.order_index,
        }
