"""
models/activity.py — append-only analytics and admin_logs rows.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AnalyticsEvent(BaseModel):
    """Matches the analytics table row."""

    id: UUID = Field(default_factory=uuid4)
    event_type: str                 # "property_view", "admin_property_archive", ...
    user_id: UUID | None = None
    property_id: UUID | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "event_type": self.event_type,
            "user_id": str(self.user_id) if self.user_id else None,
            "property_id": str(self.property_id) if self.property_id else None,
            "metadata": self.metadata,
        }


class AdminLog(BaseModel):
    """Matches the admin_logs table row."""

    id: UUID = Field(default_factory=uuid4)
    admin_id: UUID
    action: str                     # "agent_approve", "update_system_config", ...
    resource: str
    resource_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime | None = None

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "admin_id": str(self.admin_id),
            "action": self.action,
            "resource": self.resource,
            "resource_id": self.resource_id,
            "metadata": self.metadata,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }
