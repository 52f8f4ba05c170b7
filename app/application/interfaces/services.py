"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.exam import ExamSummary
    from app.application.dtos.pagination import Page


# Query cache interface
class IQueryCache(Protocol):
    """Protocol for the tiered query cache (short, medium, long)."""

    def get(self, tier: str, key: str) -> Any:
        """Return the live entry for key in tier, or None."""

    def put(self, tier: str, key: str, value: Any) -> None:
        """Store value under key in tier (evicting LRU when full)."""

    def invalidate(self, tier: str, key: str) -> bool:
        """Remove key from tier. Returns True if an entry was removed."""

    def clear(self, tier: str | None = None) -> int:
        """Remove all entries from one tier (or all). Returns count removed."""

    async def get_or_load(
        self, tier: str, key: str, loader: Callable[[], Awaitable[Any]]
    ) -> Any:
        """Return cached value or await loader() and cache its result."""

    def stats(self) -> dict[str, dict[str, Any]]:
        """Return per-tier counters."""


# Search strategy interface
class ISearchStrategy(Protocol):
    """One way of answering a free-text search (full-text or substring)."""

    name: str

    async def search(self, term: str, page: int, size: int) -> Page[ExamSummary]:
        """Return one page of matches for a non-blank term."""
