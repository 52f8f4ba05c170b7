"""Cache: in-process tiered query cache.

Used by the exam query use cases (list, criteria, search, reference values).
Tiers come from app.core.config; key format is in app.core.cache_keys (DRY).
"""

from app.infrastructure.cache.memory_cache import (
    CacheEntry,
    CacheTier,
    QueryCache,
    default_tiers,
)

__all__ = ["CacheEntry", "CacheTier", "QueryCache", "default_tiers"]
