"""In-process tiered query cache with per-tier LRU eviction and TTL.

Each tier has a fixed capacity and freshness window. Entries are immutable;
a tier's OrderedDict and counters are guarded by that tier's lock so
concurrent readers never observe a torn entry. Integrates with
app.core.cache_keys for key format (DRY).
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from app.core.config import Settings
from app.core.constants import CACHE_TIER_LONG, CACHE_TIER_MEDIUM, CACHE_TIER_SHORT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheTier:
    """Named cache region: max entries and freshness window in seconds."""

    name: str
    capacity: int
    ttl_seconds: float

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError(f"Cache tier {self.name!r} capacity must be at least 1")
        if self.ttl_seconds <= 0:
            raise ValueError(f"Cache tier {self.name!r} ttl must be positive")


@dataclass(frozen=True)
class CacheEntry:
    """Stored value with its insertion time (monotonic clock)."""

    key: str
    value: Any
    inserted_at: float


@dataclass
class _TierState:
    tier: CacheTier
    entries: OrderedDict[str, CacheEntry] = field(default_factory=OrderedDict)
    lock: threading.Lock = field(default_factory=threading.Lock)
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0


def default_tiers(settings: Settings) -> list[CacheTier]:
    """Build the short/medium/long tiers from settings."""
    return [
        CacheTier(
            CACHE_TIER_SHORT, settings.cache_short_capacity, settings.cache_short_ttl
        ),
        CacheTier(
            CACHE_TIER_MEDIUM, settings.cache_medium_capacity, settings.cache_medium_ttl
        ),
        CacheTier(
            CACHE_TIER_LONG, settings.cache_long_capacity, settings.cache_long_ttl
        ),
    ]


class QueryCache:
    """Tiered in-memory cache for query results.

    Created once per application (lifespan) and passed to the query use
    cases. Starts empty; nothing is persisted across restarts.
    """

    def __init__(
        self,
        tiers: list[CacheTier],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            tiers: Tier definitions; names must be unique.
            clock: Monotonic time source in seconds (injectable for tests).
        """
        self._clock = clock
        self._tiers: dict[str, _TierState] = {}
        for tier in tiers:
            if tier.name in self._tiers:
                raise ValueError(f"Duplicate cache tier: {tier.name!r}")
            self._tiers[tier.name] = _TierState(tier)

    @classmethod
    def from_settings(cls, settings: Settings) -> QueryCache:
        """Build a cache with the configured short/medium/long tiers."""
        return cls(default_tiers(settings))

    @property
    def tier_names(self) -> list[str]:
        return list(self._tiers)

    def _state(self, tier: str) -> _TierState:
        try:
            return self._tiers[tier]
        except KeyError:
            raise ValueError(f"Unknown cache tier: {tier!r}") from None

    def get(self, tier: str, key: str) -> CacheEntry | None:
        """Return the live entry for key, or None if missing or expired.

        Expired entries are removed on access and counted as a miss.

        Args:
            tier: Tier name (short, medium, long).
            key: Cache key (use app.core.cache_keys builders).

        Returns:
            CacheEntry or None.
        """
        state = self._state(tier)
        now = self._clock()
        with state.lock:
            entry = state.entries.get(key)
            if entry is None:
                state.misses += 1
                logger.debug("Cache MISS [%s]: %s", tier, key)
                return None
            if now - entry.inserted_at >= state.tier.ttl_seconds:
                del state.entries[key]
                state.misses += 1
                state.expirations += 1
                logger.debug("Cache EXPIRED [%s]: %s", tier, key)
                return None
            state.entries.move_to_end(key)
            state.hits += 1
        logger.debug("Cache HIT [%s]: %s", tier, key)
        return entry

    def put(self, tier: str, key: str, value: Any) -> None:
        """Store value under key, evicting the least recently used entry when full.

        Overwriting an existing key refreshes its insertion time and recency.

        Args:
            tier: Tier name.
            key: Cache key.
            value: Value to cache (treated as immutable by callers).
        """
        state = self._state(tier)
        entry = CacheEntry(key=key, value=value, inserted_at=self._clock())
        with state.lock:
            if key in state.entries:
                state.entries.move_to_end(key)
            state.entries[key] = entry
            while len(state.entries) > state.tier.capacity:
                evicted, _ = state.entries.popitem(last=False)
                state.evictions += 1
                logger.debug("Cache EVICT [%s]: %s", tier, evicted)
        logger.debug("Cache SET [%s]: %s (TTL: %ss)", tier, key, state.tier.ttl_seconds)

    def invalidate(self, tier: str, key: str) -> bool:
        """Remove key from tier. Returns True if an entry was removed."""
        state = self._state(tier)
        with state.lock:
            removed = state.entries.pop(key, None) is not None
        if removed:
            logger.debug("Cache DELETE [%s]: %s", tier, key)
        return removed

    def clear(self, tier: str | None = None) -> int:
        """Remove all entries from one tier, or from every tier when tier is None.

        Returns:
            Number of entries removed.
        """
        states = [self._state(tier)] if tier is not None else list(self._tiers.values())
        removed = 0
        for state in states:
            with state.lock:
                removed += len(state.entries)
                state.entries.clear()
        logger.info("Cache CLEARED: %s (%s entries)", tier or "all tiers", removed)
        return removed

    async def get_or_load(
        self, tier: str, key: str, loader: Callable[[], Awaitable[Any]]
    ) -> Any:
        """Return the cached value, or await loader() and cache its result.

        Concurrent misses on the same key may each run loader(); the last
        put wins. Loader exceptions propagate and nothing is cached.
        """
        entry = self.get(tier, key)
        if entry is not None:
            return entry.value
        value = await loader()
        self.put(tier, key, value)
        return value

    def stats(self) -> dict[str, dict[str, Any]]:
        """Return per-tier counters (entries, capacity, ttl, hits, misses, ...)."""
        result: dict[str, dict[str, Any]] = {}
        for name, state in self._tiers.items():
            with state.lock:
                lookups = state.hits + state.misses
                result[name] = {
                    "entries": len(state.entries),
                    "capacity": state.tier.capacity,
                    "ttl_seconds": state.tier.ttl_seconds,
                    "hits": state.hits,
                    "misses": state.misses,
                    "evictions": state.evictions,
                    "expirations": state.expirations,
                    "hit_rate_percent": round(state.hits * 100 / lookups, 2)
                    if lookups
                    else 0.0,
                }
        return result
