"""Request bodies for buyer inquiries and agent responses."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from akwaaba_shared.constants import ContactPreference, InquiryStatus, InquiryType


class InquiryCreate(BaseModel):
    property_id: UUID
    buyer_name: str = Field(min_length=1, max_length=200)
    buyer_email: EmailStr
    buyer_phone: str | None = Field(None, max_length=20)
    message: str = Field(min_length=1, max_length=2000)
    inquiry_type: InquiryType = "general"
    preferred_contact: ContactPreference = "email"


class InquiryUpdate(BaseModel):
    status: InquiryStatus | None = None
    response_message: str | None = Field(None, min_length=1, max_length=2000)
    notes: str | None = Field(None, max_length=1000)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)
