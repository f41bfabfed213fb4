"""Request bodies for listing create/update/moderation."""

from __future__ import annotations

from datetime import date
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl, field_validator, model_validator

from akwaaba_shared.constants import (
    DEFAULT_CURRENCY,
    RESIDENTIAL_TYPES,
    ImageType,
    ListingType,
    PropertyType,
    VerificationAction,
)
from akwaaba_shared.placeholders import placeholder_message


ROOMS_REQUIRED = "Houses and apartments must have at least 1 bedroom and 1 bathroom"


def missing_rooms(listing: dict[str, Any]) -> bool:
    """True when a house or apartment lacks a bedroom or a bathroom."""
    if listing.get("property_type") not in RESIDENTIAL_TYPES:
        return False
    return not listing.get("bedrooms") or not listing.get("bathrooms")


def _reject_placeholder(value: str | None, field_name: str) -> str | None:
    message = placeholder_message(value, field_name)
    if message:
        raise ValueError(message)
    return value


class PropertyImageIn(BaseModel):
    url: HttpUrl
    image_type: ImageType = "gallery"
    is_primary: bool = False
    alt_text: str | None = None
    order_index: int | None = Field(None, ge=0)


class PropertyCreate(BaseModel):
    title: str = Field(min_length=5, max_length=100)
    description: str = Field(min_length=20, max_length=2000)
    property_type: PropertyType
    listing_type: ListingType
    price: float = Field(ge=0, le=1_000_000_000)
    currency: str = Field(DEFAULT_CURRENCY, min_length=3, max_length=3)
    address: str = Field(min_length=10, max_length=500)
    city: str = Field(min_length=2, max_length=100)
    region: str = Field(min_length=2, max_length=100)
    postal_code: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    bedrooms: int | None = Field(None, ge=0, le=20)
    bathrooms: int | None = Field(None, ge=0, le=20)
    square_feet: float | None = Field(None, ge=0, le=1_000_000)
    land_size: float | None = Field(None, ge=0, le=1_000_000)
    year_built: int | None = Field(None, ge=1800)
    features: list[str] = Field(min_length=1)
    amenities: list[str] = Field(min_length=1)
    images: list[PropertyImageIn] = Field(default_factory=list)
    is_featured: bool = False

    @field_validator("title", "description", "address")
    @classmethod
    def no_placeholders(cls, v: str, info) -> str:
        return _reject_placeholder(v, info.field_name)

    @field_validator("year_built")
    @classmethod
    def not_in_future(cls, v: int | None) -> int | None:
        if v is not None and v > date.today().year:
            raise ValueError("Year built cannot be in the future")
        return v

    @model_validator(mode="after")
    def residential_needs_rooms(self) -> "PropertyCreate":
        if missing_rooms(self.model_dump(include={"property_type", "bedrooms", "bathrooms"})):
            raise ValueError(ROOMS_REQUIRED)
        return self


class PropertyUpdate(BaseModel):
    """Partial update by the owner. Status and approval are moderated elsewhere."""

    title: str | None = Field(None, min_length=5, max_length=100)
    description: str | None = Field(None, min_length=20, max_length=2000)
    property_type: PropertyType | None = None
    listing_type: ListingType | None = None
    price: float | None = Field(None, gt=0, le=1_000_000_000)
    currency: str | None = Field(None, min_length=3, max_length=3)
    address: str | None = Field(None, min_length=10, max_length=500)
    city: str | None = Field(None, min_length=2, max_length=100)
    region: str | None = Field(None, min_length=2, max_length=100)
    postal_code: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    bedrooms: int | None = Field(None, ge=0, le=20)
    bathrooms: int | None = Field(None, ge=0, le=20)
    square_feet: float | None = Field(None, ge=0, le=1_000_000)
    land_size: float | None = Field(None, ge=0, le=1_000_000)
    year_built: int | None = Field(None, ge=1800)
    features: list[str] | None = None
    amenities: list[str] | None = None

    @field_validator("title", "description", "address")
    @classmethod
    def no_placeholders(cls, v: str | None, info) -> str | None:
        if v is None:
            return v
        return _reject_placeholder(v, info.field_name)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class AdminPropertyUpdate(PropertyUpdate):
    """Admins may also toggle featuring and mark a listing sold."""

    is_featured: bool | None = None
    mark_sold: bool | None = None


class PropertyApproval(BaseModel):
    propertyId: UUID
    action: VerificationAction
    reason: str | None = Field(None, min_length=1, max_length=500)
