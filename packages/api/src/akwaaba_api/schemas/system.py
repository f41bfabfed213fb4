"""Request bodies for admin-tunable system configuration and auth proxying."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, EmailStr, Field

from akwaaba_shared.constants import ConfigCategory


class ConfigUpsert(BaseModel):
    category: ConfigCategory
    key: str = Field(min_length=1, max_length=200)
    value: Any = None
    description: str | None = None
    is_public: bool = False


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    full_name: str = Field(min_length=2, max_length=200)
    phone: str | None = Field(None, min_length=10, max_length=20)
    user_role: Literal["customer", "agent"] = "customer"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
