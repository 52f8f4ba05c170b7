"""Query shape and paginated result DTOs shared by exam queries and search."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from app.core.constants import DEFAULT_SORT_FIELD
from app.domain.enums import SortDirection

T = TypeVar("T")


@dataclass(frozen=True)
class QuerySpec:
    """Normalized query: filters, sort, and page window (page >= 0, size >= 1)."""

    page: int = 0
    size: int = 20
    sort_field: str = DEFAULT_SORT_FIELD
    sort_direction: SortDirection = SortDirection.ASC
    filters: Mapping[str, Any] = field(default_factory=dict)

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def sort_token(self) -> str:
        """Sort as one string for cache keys (e.g. 'date,asc')."""
        return f"{self.sort_field},{self.sort_direction.value}"


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus totals for the whole query."""

    items: list[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages
