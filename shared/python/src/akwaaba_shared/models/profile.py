"""
models/profile.py — Pydantic model for the profiles table.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from akwaaba_shared.constants import Role, VerificationStatus


class Profile(BaseModel):
    """Matches the profiles table row.

    `id` is the profile row key; `user_id` is the auth provider identity the
    session token carries. Listings reference the latter via `seller_id`.
    """

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    email: str
    full_name: str = ""
    phone: str | None = None
    company_name: str | None = None
    license_number: str | None = None
    specializations: list[str] = Field(default_factory=list)
    experience_years: int | None = None
    bio: str | None = None
    profile_image: str | None = None
    cover_image: str | None = None
    address: str | None = None
    city: str | None = None
    region: str | None = None
    user_role: Role = Role.CUSTOMER
    verification_status: VerificationStatus = VerificationStatus.PENDING
    is_verified: bool = False
    admin_notes: str | None = None
    rejection_reason: str | None = None
    verified_by: UUID | None = None
    profile_completed: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "Profile":
        data = dict(row)
        if data.get("specializations") is None:
            data["specializations"] = []
        return cls(**data)

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "email": self.email,
            "full_name": self.full_name,
            "phone": self.phone,
            "company_name": self.company_name,
            "license_number": self.license_number,
            "specializations": self.specializations,
            "experience_years": self.experience_years,
            "bio": self.bio,
            "profile_image": self.profile_image,
            "cover_image": self.cover_image,
            "address": self.address,
            "city": self.city,
            "region": self.region,
            "user_role": self.user_role.value,
            "verification_status": self.verification_status.value,
            "is_verified": self.is_verified,
            "profile_completed": self.profile_completed,
        }
