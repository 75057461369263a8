"""Cache stores for callers memoizing manifest lookups."""
from wpt_manifest.cache.store import (
    CacheStore,
    InMemoryCacheStore,
    RedisCacheStore,
    new_cache_store,
)

__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "RedisCacheStore",
    "new_cache_store",
]
