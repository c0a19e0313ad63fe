"""Redis implementation of CacheStore.

Entries are plain string keys written with ``SET ... EX`` so Redis expires
them on its own. Prefix deletion walks the keyspace with ``SCAN`` instead of
``KEYS`` to avoid blocking the server.
"""

import logging

import redis

from distance_matrix.config import get_redis_client, settings

logger = logging.getLogger(__name__)


class RedisCacheRepository:
    """Redis implementation of the CacheStore protocol.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        scan_count: int = 500,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
            scan_count: Hint for the number of keys per SCAN iteration.
        """
        self._client = redis_client or get_redis_client()
        self._scan_count = scan_count

    @classmethod
    def create(cls, redis_client: redis.Redis | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository with defaults.

        Args:
            redis_client: Redis client. If None, connects to settings.redis_url.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(redis_client=redis_client)

    def get(self, key: str) -> str | None:
        """Fetch a value by key.

        Args:
            key: The cache key

        Returns:
            The stored value, or None if missing or expired
        """
        value = self._client.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str, ttl: int) -> None:
        """Store a value with an expiry.

        Args:
            key: The cache key
            value: Serialized value
            ttl: Time-to-live in seconds
        """
        self._client.set(key, value, ex=ttl)

    def delete(self, key: str) -> bool:
        """Delete a specific entry by key.

        Args:
            key: The storage key to delete

        Returns:
            True if deleted, False otherwise
        """
        result: int = self._client.delete(key)  # type: ignore[assignment]
        return result > 0

    def delete_by_prefix(self, prefix: str) -> int:
        """Delete every key in a namespace.

        Args:
            prefix: Key prefix, matched literally

        Returns:
            Number of entries deleted
        """
        pattern = f"{_escape_glob(prefix)}*"
        count = 0
        batch: list = []
        for key in self._client.scan_iter(match=pattern, count=self._scan_count):
            batch.append(key)
            if len(batch) >= self._scan_count:
                count += self._client.delete(*batch)  # type: ignore[operator]
                batch = []
        if batch:
            count += self._client.delete(*batch)  # type: ignore[operator]

        logger.debug("Deleted %d Redis keys matching %s", count, pattern)
        return count

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            result = self._client.ping()
            return bool(result)
        except redis.RedisError as e:
            logger.warning("Redis health check failed: %s", e)
            return False

    def get_stats(self, prefix: str | None = None) -> dict:
        """Get repository statistics.

        Args:
            prefix: Key namespace to count. Defaults to settings.cache_prefix;
                    pass the client's cache_prefix when it uses a custom one.

        Returns:
            Dictionary with stats
        """
        pattern = f"{_escape_glob(prefix or settings.cache_prefix)}*"
        count = 0
        for _ in self._client.scan_iter(match=pattern, count=self._scan_count):
            count += 1
        return {
            "backend": "redis",
            "total_entries": count,
        }

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client


def _escape_glob(text: str) -> str:
    """Escape Redis glob metacharacters so a prefix matches literally."""
    for char in ("\\", "*", "?", "[", "]"):
        text = text.replace(char, f"\\{char}")
    return text
