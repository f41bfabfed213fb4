"""
constants.py — shared constants used across the API and the admin CLI.

Roles, status value sets, table names and profile-completion fields are
defined here so they stay in sync between Python packages and with the
CHECK constraints in the database.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Literal


class Role(str, Enum):
    CUSTOMER = "customer"
    AGENT = "agent"
    ADMIN = "admin"


class VerificationStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class PropertyStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    ARCHIVED = "archived"
    SOLD = "sold"


class ApprovalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class InquiryStatus(str, Enum):
    PENDING = "pending"
    RESPONDED = "responded"
    CLOSED = "closed"
    SPAM = "spam"


# ---------------------------------------------------------------------------
# Typed literals
# ---------------------------------------------------------------------------
PropertyType = Literal["house", "apartment", "land", "commercial", "office"]
ListingType = Literal["sale", "rent", "lease"]
ImageType = Literal["primary", "gallery", "floorplan", "exterior", "interior"]
InquiryType = Literal["general", "viewing", "price", "details"]
ContactPreference = Literal["email", "phone", "whatsapp"]
ConfigCategory = Literal[
    "general", "security", "features", "notifications", "integrations", "performance"
]
VerificationAction = Literal["approve", "reject"]
AnalyticsRange = Literal["1m", "3m", "6m", "1y"]
SellerPeriod = Literal["7d", "30d", "90d", "1y"]

RESIDENTIAL_TYPES: Final[frozenset[str]] = frozenset({"house", "apartment"})

# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------
PROFILES_TABLE: Final = "profiles"
PROPERTIES_TABLE: Final = "properties"
PROPERTY_IMAGES_TABLE: Final = "property_images"
INQUIRIES_TABLE: Final = "inquiries"
SYSTEM_CONFIG_TABLE: Final = "system_config"
ANALYTICS_TABLE: Final = "analytics"
ADMIN_LOGS_TABLE: Final = "admin_logs"

# ---------------------------------------------------------------------------
# Profile completion
# ---------------------------------------------------------------------------
PROFILE_REQUIRED_FIELDS: Final[tuple[str, ...]] = (
    "full_name",
    "phone",
    "company_name",
    "license_number",
    "specializations",
    "experience_years",
    "bio",
    "profile_image",
    "cover_image",
)

PROFILE_FIELD_LABELS: Final[dict[str, str]] = {
    "full_name": "Full Name",
    "phone": "Phone Number",
    "company_name": "Company Name",
    "license_number": "License Number",
    "specializations": "Specializations",
    "experience_years": "Years of Experience",
    "bio": "Bio/Description",
    "profile_image": "Profile Photo",
    "cover_image": "Cover Image",
}

# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------
ALLOWED_IMAGE_TYPES: Final[dict[str, str]] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/avif": "avif",
}

DEFAULT_CURRENCY: Final = "GHS"
