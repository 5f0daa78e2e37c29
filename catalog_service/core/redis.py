"""
Cache stores for the translation catalog.

RedisCache is the production backend (supports key listing via SCAN).
MemoryCache is an in-process backend for single-worker deployments and tests;
key listing can be switched off to run the export cache in degraded mode.
"""
import json
import logging
import re
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import redis

logger = logging.getLogger(__name__)

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def _serialize(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _deserialize(value: str) -> Any:
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


class RedisCache:
    """Redis cache manager with connection pooling."""

    supports_key_listing = True

    def __init__(self, url: str, max_connections: int = 20):
        """Initialize Redis connection pool settings (not connected yet)."""
        self.url = url
        self.max_connections = max_connections
        self._pool: Optional[redis.ConnectionPool] = None
        self._client: Optional[redis.Redis] = None
        self._connected = False

    def connect(self):
        """
        Connect to Redis server.
        Safe to call multiple times - will reuse existing connection.
        """
        if self._connected and self._client:
            return

        try:
            self._pool = redis.ConnectionPool.from_url(
                self.url,
                max_connections=self.max_connections,
                decode_responses=True,
                socket_timeout=5,
                socket_connect_timeout=5,
            )
            self._client = redis.Redis(connection_pool=self._pool)

            # Test connection
            self._client.ping()
            self._connected = True
            logger.info("Redis cache connected successfully")
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {e}. Caching disabled.")
            self._connected = False
            self._client = None

    def disconnect(self):
        """Disconnect from Redis."""
        if self._pool:
            self._pool.disconnect()
        self._connected = False
        self._client = None
        logger.info("Redis cache disconnected")

    @property
    def is_connected(self) -> bool:
        """Check if Redis is connected."""
        return self._connected and self._client is not None

    def ping(self) -> bool:
        if not self.is_connected:
            return False
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            logger.warning(f"Redis PING error: {e}")
            return False

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found/error
        """
        if not self.is_connected:
            return None

        try:
            value = self._client.get(key)
            if value is None:
                return None
            return _deserialize(value)
        except redis.RedisError as e:
            logger.warning(f"Redis GET error for key '{key}': {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        """
        Set value in cache with TTL.

        Args:
            key: Cache key
            value: Value to cache (will be JSON serialized)
            ttl: Time to live in seconds (default: 1 hour)

        Returns:
            True if successful, False otherwise
        """
        if not self.is_connected:
            return False

        try:
            self._client.setex(key, ttl, _serialize(value))
            return True
        except redis.RedisError as e:
            logger.warning(f"Redis SET error for key '{key}': {e}")
            return False

    def delete(self, key: str) -> bool:
        """
        Delete key from cache.

        Returns:
            True if the delete was issued (key may not have existed), False on error
        """
        if not self.is_connected:
            return False

        try:
            self._client.delete(key)
            return True
        except redis.RedisError as e:
            logger.warning(f"Redis DELETE error for key '{key}': {e}")
            return False

    def list_keys(self, prefix: str) -> Optional[List[str]]:
        """
        List keys starting with prefix.
        Uses SCAN so a large keyspace does not block the server.

        Returns:
            Matching keys, or None if the listing failed
        """
        if not self.is_connected:
            return None

        pattern = _GLOB_SPECIAL.sub(r"\\\1", prefix) + "*"
        try:
            return list(self._client.scan_iter(match=pattern, count=500))
        except redis.RedisError as e:
            logger.warning(f"Redis SCAN error for prefix '{prefix}': {e}")
            return None


class MemoryCache:
    """
    Thread-safe in-process cache with per-key TTL.
    Values are stored JSON-serialized, same as Redis, so readers get copies.
    """

    def __init__(
        self,
        supports_key_listing: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.supports_key_listing = supports_key_listing
        self._clock = clock
        self._data: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.RLock()

    @property
    def is_connected(self) -> bool:
        return True

    def connect(self):
        pass

    def disconnect(self):
        self.clear()

    def ping(self) -> bool:
        return True

    def _live(self, key: str) -> Optional[str]:
        item = self._data.get(key)
        if item is None:
            return None
        value, expires_at = item
        if self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            value = self._live(key)
        if value is None:
            return None
        return _deserialize(value)

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        with self._lock:
            self._data[key] = (_serialize(value), self._clock() + ttl)
        return True

    def delete(self, key: str) -> bool:
        with self._lock:
            self._data.pop(key, None)
        return True

    def list_keys(self, prefix: str) -> Optional[List[str]]:
        """Live keys starting with prefix; None when listing is disabled."""
        if not self.supports_key_listing:
            return None
        with self._lock:
            return [k for k in list(self._data) if k.startswith(prefix) and self._live(k) is not None]

    def keys(self) -> List[str]:
        """All live keys (diagnostics and tests)."""
        with self._lock:
            return [k for k in list(self._data) if self._live(k) is not None]

    def clear(self):
        with self._lock:
            self._data.clear()


def build_cache_store(backend: str, redis_url: str):
    """
    Create and connect the process-wide cache store.
    Called once from application startup.
    """
    if backend == "memory":
        logger.info("Using in-process memory cache")
        return MemoryCache()

    store = RedisCache(redis_url)
    store.connect()
    return store
