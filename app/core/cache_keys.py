"""Cache key builders for query results. Single place for key format (DRY).

Key components are percent-quoted so a value can never contain
CACHE_KEY_SEP and two different query shapes never share a key.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_COUNTS,
    CACHE_PREFIX_DISTINCT,
    CACHE_PREFIX_SEARCH,
)


def _quote(value: Any) -> str:
    """Percent-quote one key component (no character is left safe)."""
    return quote(str(value), safe="")


def normalize_term(term: str) -> str:
    """Trim and collapse inner whitespace. Case is kept (the key must match the query run)."""
    return " ".join(term.split())


def normalize_filters(filters: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """Drop None and blank values; return (field, value) pairs sorted by field.

    None, absent, and blank filters collapse to the same key so they share
    one cache entry.
    """
    if not filters:
        return []
    pairs: list[tuple[str, str]] = []
    for field, value in filters.items():
        if value is None:
            continue
        text = value.isoformat() if hasattr(value, "isoformat") else str(value)
        if not text.strip():
            continue
        pairs.append((field, text.strip()))
    return sorted(pairs)


def query_key(
    operation: str,
    filters: Mapping[str, Any] | None,
    page: int,
    size: int,
    sort: str = "",
) -> str:
    """Cache key for a paginated query: operation, filters, page, size, sort."""
    parts = [_quote(operation)]
    parts.extend(f"{_quote(f)}={_quote(v)}" for f, v in normalize_filters(filters))
    parts.append(f"p={page}")
    parts.append(f"s={size}")
    if sort:
        parts.append(f"o={_quote(sort)}")
    return CACHE_KEY_SEP.join(parts)


def search_key(term: str, page: int, size: int) -> str:
    """Cache key for a free-text search page (term normalized)."""
    return CACHE_KEY_SEP.join(
        [CACHE_PREFIX_SEARCH, _quote(normalize_term(term)), f"p={page}", f"s={size}"]
    )


def reference_key(field: str) -> str:
    """Cache key for the distinct values of one field."""
    return f"{CACHE_PREFIX_DISTINCT}{CACHE_KEY_SEP}{_quote(field)}"


def counts_key(field: str) -> str:
    """Cache key for exam counts grouped by one field."""
    return f"{CACHE_PREFIX_COUNTS}{CACHE_KEY_SEP}{_quote(field)}"
