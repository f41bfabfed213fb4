"""Request bodies for self-service profile edits and agent verification."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl

from akwaaba_shared.constants import Role, VerificationAction


class ProfileUpdate(BaseModel):
    full_name: str | None = Field(None, min_length=2)
    phone: str | None = Field(None, min_length=10)
    company_name: str | None = Field(None, min_length=2)
    license_number: str | None = Field(None, min_length=5)
    specializations: list[str] | None = Field(None, min_length=1)
    experience_years: int | None = Field(None, ge=0, le=50)
    bio: str | None = Field(None, max_length=500)
    profile_image: HttpUrl | None = None
    cover_image: HttpUrl | None = None
    address: str | None = None
    city: str | None = None
    region: str | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)


class AgentVerification(BaseModel):
    agentId: UUID
    action: VerificationAction
    reason: str | None = Field(None, min_length=1)
    adminNotes: str | None = Field(None, max_length=500)


class RoleChange(BaseModel):
    user_role: Role
