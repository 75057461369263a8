"""TTL-bounded key/value stores handed out to callers for memoization."""
import logging
import math
import time
from datetime import timedelta
from typing import Callable, Dict, Optional, Protocol, Tuple

from redis import Redis, RedisError

from wpt_manifest.core.errors import CacheStoreError

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    """Read/write store whose entries expire ``ttl`` after being written."""

    ttl: timedelta

    def get(self, key: str) -> Optional[bytes]: ...

    def put(self, key: str, value: bytes) -> None: ...


class RedisCacheStore:
    """Cache store backed by Redis ``SET ... PX`` (millisecond expiry)."""

    def __init__(self, client: Redis, ttl: timedelta):
        self.client = client
        self.ttl = ttl

    @property
    def ttl_millis(self) -> int:
        return max(1, math.ceil(self.ttl / timedelta(milliseconds=1)))

    def get(self, key: str) -> Optional[bytes]:
        try:
            value = self.client.get(key)
        except RedisError as e:
            raise CacheStoreError(f"Redis GET {key} failed: {e}") from e
        if isinstance(value, str):
            value = value.encode("utf-8")
        return value

    def put(self, key: str, value: bytes) -> None:
        try:
            self.client.set(key, value, px=self.ttl_millis)
        except RedisError as e:
            raise CacheStoreError(f"Redis SET {key} failed: {e}") from e


class InMemoryCacheStore:
    """Process-local store; expired entries are dropped on read and on every put."""

    def __init__(self, ttl: timedelta, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[float, bytes]] = {}

    def get(self, key: str) -> Optional[bytes]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def put(self, key: str, value: bytes) -> None:
        now = self._clock()
        for stale in [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]:
            del self._entries[stale]
        self._entries[key] = (now + self.ttl.total_seconds(), bytes(value))


def new_cache_store(
    ttl: timedelta,
    redis_url: Optional[str] = None,
    redis_client: Optional[Redis] = None,
) -> CacheStore:
    """Create an independent cache store bound to ``ttl``.

    No I/O happens here: ``Redis.from_url`` connects lazily on first command.
    Without a Redis client or URL an in-memory store is returned.

    Raises:
        ValueError: If ttl is not positive
    """
    if ttl <= timedelta(0):
        raise ValueError(f"Cache TTL must be positive; got {ttl}")

    if redis_client is None and redis_url:
        redis_client = Redis.from_url(redis_url)
    if redis_client is not None:
        logger.debug(f"New Redis cache store, ttl={ttl}")
        return RedisCacheStore(redis_client, ttl)

    logger.debug(f"New in-memory cache store, ttl={ttl}")
    return InMemoryCacheStore(ttl)
