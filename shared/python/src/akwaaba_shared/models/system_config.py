"""
models/system_config.py — Pydantic model for the system_config table.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from akwaaba_shared.constants import ConfigCategory


class SystemConfig(BaseModel):
    """Matches the system_config table row.

    `value` is stored JSON-encoded in a text column so arbitrary scalars and
    objects round-trip through the same column.
    """

    id: UUID = Field(default_factory=uuid4)
    category: ConfigCategory
    key: str
    value: Any = None
    description: str | None = None
    is_public: bool = False
    created_by: UUID | None = None
    updated_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "SystemConfig":
        data = dict(row)
        raw = data.get("value")
        if isinstance(raw, str):
            try:
                data["value"] = json.loads(raw)
            except json.JSONDecodeError:
                pass
        return cls(**data)

    def to_insert_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "category": self.category,
            "key": self.key,
            "value": json.dumps(self.value),
            "description": self.description,
            "is_public": self.is_public,
            "created_by": str(self.created_by) if self.created_by else None,
            "updated_by": str(self.updated_by) if self.updated_by else None,
        }
