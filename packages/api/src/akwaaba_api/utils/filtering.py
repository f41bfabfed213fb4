"""Query parameter parsing and Supabase filter builders."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

# PostgREST `or=` filters are comma/paren delimited; strip those from user input.
_OR_UNSAFE = re.compile(r"[,()*%\\]")


def sanitize_search_term(term: str) -> str:
    return _OR_UNSAFE.sub(" ", term).strip()


def apply_range_filters(
    query: Any,
    column: str,
    minimum: Decimal | int | float | None,
    maximum: Decimal | int | float | None,
) -> Any:
    """Apply an inclusive numeric range filter."""
    if minimum is not None:
        query = query.gte(column, float(minimum))
    if maximum is not None:
        query = query.lte(column, float(maximum))
    return query


def apply_min_filter(query: Any, column: str, minimum: int | None) -> Any:
    if minimum is not None:
        query = query.gte(column, minimum)
    return query


def apply_text_search(
    query: Any,
    columns: tuple[str, ...] | list[str],
    search_term: str | None,
) -> Any:
    """Apply a case-insensitive substring search across one or more columns."""
    if not search_term:
        return query
    term = sanitize_search_term(search_term)
    if not term:
        return query
    if len(columns) == 1:
        return query.ilike(columns[0], f"%{term}%")
    return query.or_(",".join(f"{c}.ilike.%{term}%" for c in columns))


def apply_equals(query: Any, **filters: Any) -> Any:
    """Apply `eq` for every filter whose value is not None."""
    for column, value in filters.items():
        if value is not None:
            query = query.eq(column, getattr(value, "value", value))
    return query
