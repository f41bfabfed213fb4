"""
placeholders.py — detect filler text typed into listing forms.

Used by the listing create/update schemas to reject submissions and by the
admin CLI to find existing rows that slipped through.
"""

from __future__ import annotations

import re
from typing import Any, Final

# Runs of a single repeated letter ("aaa", "qqqq"), obvious test words, and
# values too short to mean anything.
PLACEHOLDER_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"^([a-z])\1{2,}$", re.IGNORECASE),
    re.compile(r"\btest\b", re.IGNORECASE),
    re.compile(r"placeholder", re.IGNORECASE),
    re.compile(r"lorem ipsum", re.IGNORECASE),
    re.compile(r"^.{1,2}$"),
)

CHECKED_FIELDS: Final[tuple[str, ...]] = ("title", "description", "address")


def is_placeholder(value: str | None) -> bool:
    """Return True if the value looks like placeholder text."""
    if value is None:
        return False
    text = value.strip()
    if not text:
        return True
    return any(p.search(text) for p in PLACEHOLDER_PATTERNS)


def placeholder_message(value: str | None, field_name: str) -> str | None:
    """Return a user-facing error message, or None if the value is fine."""
    if is_placeholder(value):
        return (
            f"{field_name} contains placeholder data. "
            f"Please provide a real {field_name}."
        )
    return None


def find_placeholder_fields(row: dict[str, Any]) -> list[str]:
    """Return the names of the listing fields that hold placeholder text."""
    return [f for f in CHECKED_FIELDS if isinstance(row.get(f), str) and is_placeholder(row[f])]
