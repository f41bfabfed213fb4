"""Standardized API response wrappers."""

from __future__ import annotations

from typing import Any


def wrap_response(
    data: Any,
    *,
    message: str | None = None,
    pagination: dict[str, int] | None = None,
    links: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build a standardized API response dict."""
    body: dict[str, Any] = {"data": data}
    if message is not None:
        body["message"] = message
    if pagination is not None:
        body["pagination"] = pagination
    if links:
        body["links"] = links
    return body


def error_response(message: str, *, details: Any | None = None) -> dict[str, Any]:
    """Build a standardized error response dict."""
    err: dict[str, Any] = {"error": message}
    if details is not None:
        err["details"] = details
    return err
