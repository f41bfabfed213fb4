"""
models/inquiry.py — Pydantic model for the inquiries table.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from akwaaba_shared.constants import ContactPreference, InquiryStatus, InquiryType


class Inquiry(BaseModel):
    """Matches the inquiries table row. `profile_id` is null for anonymous buyers."""

    id: UUID = Field(default_factory=uuid4)
    property_id: UUID
    profile_id: UUID | None = None
    buyer_name: str
    buyer_email: str
    buyer_phone: str | None = None
    message: str
    inquiry_type: InquiryType = "general"
    preferred_contact: ContactPreference = "email"
    status: InquiryStatus = InquiryStatus.PENDING
    response_message: str | None = None
    responded_at: datetime | None = None
    notes: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "Inquiry":
        return cls(**row)

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "profile_id": str(self.profile_id) if self.profile_id else None,
            "buyer_name": self.buyer_name,
            "buyer_email": self.buyer_email,
            "buyer_phone": self.buyer_phone,
            "message": self.message,
            "inquiry_type": self.inquiry_type,
            "preferred_contact": self.preferred_contact,
            "status": self.status.value,
            "is_anonymous": self.profile_id is None,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
        }
