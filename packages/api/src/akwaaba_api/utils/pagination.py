"""Page/limit pagination helpers."""

from __future__ import annotations

import math
from typing import Any
from urllib.parse import urlencode

from fastapi import Query

from akwaaba_shared.config import settings


class PaginationParams:
    """Dependency for extracting `page` / `limit` query params."""

    def __init__(
        self,
        page: int = Query(1, ge=1, description="1-based page number"),
        limit: int = Query(
            settings.default_page_size,
            ge=1,
            le=settings.max_page_size,
            description="Number of results per page",
        ),
    ) -> None:
        self.page = page
        self.limit = limit

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int | None) -> dict[str, int]:
        return build_pagination(self.page, self.limit, total)


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


def build_pagination(page: int, limit: int, total: int | None) -> dict[str, int]:
    total = total or 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": total_pages(total, limit),
    }


def build_links(
    path: str,
    params: dict[str, Any],
    page: int,
    limit: int,
    total: int | None,
) -> dict[str, str]:
    """Build self/next/prev links for a paginated response."""
    base = {k: v for k, v in params.items() if v is not None}

    def _link(p: int) -> str:
        return f"{path}?{urlencode({**base, 'page': p, 'limit': limit})}"

    links: dict[str, str] = {"self": _link(page)}
    if page < total_pages(total or 0, limit):
        links["next"] = _link(page + 1)
    if page > 1:
        links["prev"] = _link(page - 1)
    return links
