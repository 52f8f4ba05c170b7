"""Core constants: cache tier names, cache key prefixes, and query literals.

Single source of truth for cache key structure (DRY). Used by the
in-process query cache and the exam query use cases.
"""

# Cache tiers (see app.infrastructure.cache.memory_cache.CacheTier)
CACHE_TIER_SHORT = "short"
CACHE_TIER_MEDIUM = "medium"
CACHE_TIER_LONG = "long"
CACHE_TIERS = (CACHE_TIER_SHORT, CACHE_TIER_MEDIUM, CACHE_TIER_LONG)

# Cache key prefixes (one per cached query operation)
CACHE_PREFIX_EXAMS = "exams"
CACHE_PREFIX_BY_CRITERIA = "exams_by_criteria"
CACHE_PREFIX_SEARCH = "exam_search"
CACHE_PREFIX_DISTINCT = "distinct"
CACHE_PREFIX_COUNTS = "exam_counts"

# Delimiter for composite keys; key components are percent-quoted so they never contain it
CACHE_KEY_SEP = ":"

# Columns exposed for sorting, filtering and distinct-value lookups
SORTABLE_FIELDS = frozenset(
    {"id", "subject", "degree", "year", "semester", "date", "room", "school"}
)
DEFAULT_SORT_FIELD = "date"
REFERENCE_FIELDS = ("degree", "year", "semester", "school", "room")
# Reference lists ordered descending (everything else is ascending lexical)
DESCENDING_REFERENCE_FIELDS = frozenset({"year"})
