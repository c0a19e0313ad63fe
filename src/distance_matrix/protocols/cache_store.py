"""Cache storage protocol.

Defines the interface for any key-value backend that can hold serialized
Distance Matrix payloads with a time-to-live.

Implementations can include:
- Redis (default)
- In-process dictionary (tests, single-process tools)
- Memcached or any other store with TTL and prefix deletion
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed. Backends are expected to get, set and delete
    whole values atomically; callers never update an entry in place.

    Example:
        ```python
        from distance_matrix.protocols import CacheStore

        store: CacheStore = RedisCacheRepository.create()
        store: CacheStore = InMemoryCacheRepository()
        ```
    """

    def get(self, key: str) -> str | None:
        """Fetch a value.

        Args:
            key: The cache key

        Returns:
            The stored value, or None if missing or expired
        """
        ...

    def set(self, key: str, value: str, ttl: int) -> None:
        """Store a value with an expiry.

        Args:
            key: The cache key
            value: Serialized value
            ttl: Time-to-live in seconds
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete a single key.

        Args:
            key: The cache key

        Returns:
            True if a value was deleted, False otherwise
        """
        ...

    def delete_by_prefix(self, prefix: str) -> int:
        """Delete every key starting with a prefix.

        Args:
            prefix: Key namespace prefix

        Returns:
            Number of entries deleted

        Raises:
            Exception: Backend-specific errors if the store is unreachable
        """
        ...

    def health_check(self) -> bool:
        """Check if the store is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...
