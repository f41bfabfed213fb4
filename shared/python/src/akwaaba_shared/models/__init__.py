"""
akwaaba_shared.models — Pydantic models matching each database table.

These models are used by:
- packages/api: build insert rows and normalise query results
- packages/admin: read and report on rows from the CLI

Table models provide:
  .from_db_row(row: dict) -> Model
  .to_insert_dict() -> dict
"""

from akwaaba_shared.models.activity import AdminLog, AnalyticsEvent
from akwaaba_shared.models.inquiry import Inquiry
from akwaaba_shared.models.profile import Profile
from akwaaba_shared.models.property import Property, PropertyImage
from akwaaba_shared.models.system_config import SystemConfig

__all__ = [
    "AdminLog",
    "AnalyticsEvent",
    "Inquiry",
    "Profile",
    "Property",
    "PropertyImage",
    "SystemConfig",
]
