"""Distance matrix client: the core business logic.

This service orchestrates a distance matrix query by coordinating the
cache store (data access) and the matrix provider (remote web service).
"""

import hashlib
import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from distance_matrix.config import settings, validate_cache_ttl
from distance_matrix.entities import (
    Avoid,
    MatrixResponse,
    RequestOptions,
    TrafficModel,
    TravelMode,
    Units,
)
from distance_matrix.protocols import CacheStore, MatrixProvider
from distance_matrix.repositories import (
    GoogleDistanceMatrixProvider,
    InMemoryCacheRepository,
    RedisCacheRepository,
)

logger = logging.getLogger(__name__)


def join_addresses(addresses: str | Sequence[str]) -> str:
    """Join a list of addresses with ``|``; a bare string passes through."""
    if isinstance(addresses, str):
        return addresses
    return "|".join(addresses)


def canonical_json(options: Mapping[str, Any]) -> str:
    """Serialize options with sorted keys so insertion order never matters."""
    return json.dumps(dict(options), sort_keys=True, separators=(",", ":"), default=str)


class DistanceMatrixClient:
    """Client for the Google Distance Matrix API with optional caching.

    This service depends on PROTOCOLS, not concrete implementations:
    - MatrixProvider: the Google web service, or a test double
    - CacheStore: Redis, in-memory, etc.

    Option setters validate their value and return the client, so they can
    be chained. Invalid values raise InvalidOptionError and leave the current
    options untouched.

    Example:
        ```python
        from distance_matrix.services import DistanceMatrixClient

        client = DistanceMatrixClient.create(api_key="...")
        response = (
            client.set_mode("walking")
            .set_units("imperial")
            .calculate(["Times Square, NY"], ["Central Park, NY", "Brooklyn Bridge, NY"])
        )
        print(response.formatted_distance(0, 1))
        ```
    """

    def __init__(
        self,
        api_key: str,
        provider: MatrixProvider,
        repository: CacheStore | None = None,
        enable_cache: bool = True,
        cache_ttl: int = 86400,
        cache_prefix: str | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Google API key (required).
            provider: Remote matrix service (required).
            repository: Cache storage backend. Required when enable_cache is True.
            enable_cache: Whether to read and write cached responses.
            cache_ttl: Cache expiry in seconds (>= 300, multiple of 300).
            cache_prefix: Key namespace. Defaults to settings.cache_prefix.

        Raises:
            ValueError: If the TTL is invalid or caching is enabled without a repository
        """
        if enable_cache and repository is None:
            raise ValueError("A cache repository is required when caching is enabled")

        self._api_key = api_key
        self._provider = provider
        self._repository = repository
        self._enable_cache = enable_cache
        self._ttl = validate_cache_ttl(cache_ttl)
        self._prefix = cache_prefix or settings.cache_prefix
        self._options = RequestOptions()

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        provider: MatrixProvider | None = None,
        repository: CacheStore | None = None,
        enable_cache: bool | None = None,
        cache_ttl: int | None = None,
    ) -> "DistanceMatrixClient":
        """Factory method to create a client with sensible defaults.

        Missing arguments are filled from settings. The default provider is
        GoogleDistanceMatrixProvider; the default repository follows
        settings.cache_backend and is only built when caching is enabled.

        Returns:
            Configured DistanceMatrixClient

        Example:
            ```python
            from distance_matrix.repositories import InMemoryCacheRepository

            client = DistanceMatrixClient.create(
                api_key="...",
                repository=InMemoryCacheRepository(),
                cache_ttl=3600,
            )
            ```
        """
        if enable_cache is None:
            enable_cache = settings.enable_cache

        if repository is None and enable_cache:
            if settings.cache_backend == "memory":
                repository = InMemoryCacheRepository()
            else:
                repository = RedisCacheRepository.create()

        return cls(
            api_key=api_key if api_key is not None else settings.google_maps_api_key,
            provider=provider or GoogleDistanceMatrixProvider.create(),
            repository=repository,
            enable_cache=enable_cache,
            cache_ttl=cache_ttl or settings.cache_ttl,
        )

    # Option setters

    def set_mode(self, mode: TravelMode | str) -> "DistanceMatrixClient":
        """Set travel mode (driving, walking, bicycling, transit)."""
        self._options = self._options.with_mode(mode)
        return self

    def set_units(self, units: Units | str) -> "DistanceMatrixClient":
        """Set unit system (metric, imperial)."""
        self._options = self._options.with_units(units)
        return self

    def set_avoid(self, avoid: Avoid | str | None) -> "DistanceMatrixClient":
        """Set feature to avoid (tolls, highways, ferries), or None to clear."""
        self._options = self._options.with_avoid(avoid)
        return self

    def set_language(self, language: str) -> "DistanceMatrixClient":
        """Set language code for results."""
        self._options = self._options.with_language(language)
        return self

    def set_traffic_model(self, model: TrafficModel | str | None) -> "DistanceMatrixClient":
        """Set traffic model (best_guess, pessimistic, optimistic), or None to clear."""
        self._options = self._options.with_traffic_model(model)
        return self

    def reset_options(self) -> "DistanceMatrixClient":
        """Restore default options (driving, metric, en)."""
        self._options = RequestOptions()
        return self

    @property
    def options(self) -> RequestOptions:
        """Current default options."""
        return self._options

    # Cache keys

    def cache_key(self, identifier: str) -> str:
        """Derive the namespaced cache key for an identifier.

        The API key is part of the hash so two accounts never share entries.
        """
        digest = hashlib.md5(f"{identifier}{self._api_key}".encode("utf-8")).hexdigest()
        return f"{self._prefix}{digest}"

    def request_identifier(
        self,
        origins: str | Sequence[str],
        destinations: str | Sequence[str],
        options: Mapping[str, Any] | None = None,
    ) -> str:
        """Build the cache identifier ``calculate`` uses for a request.

        The identifier covers the effective options (defaults merged with
        per-call values), so changing any option yields a different key.

        Raises:
            InvalidOptionError: If a per-call option value is not recognized
        """
        merged = self._options.merge(options)
        return self._identifier(join_addresses(origins), join_addresses(destinations), merged)

    def _identifier(self, origins: str, destinations: str, merged: Mapping[str, Any]) -> str:
        options_hash = hashlib.md5(canonical_json(merged).encode("utf-8")).hexdigest()
        return f"matrix_{origins}_{destinations}_{options_hash}"

    # Operations

    def calculate(
        self,
        origins: str | Sequence[str],
        destinations: str | Sequence[str],
        options: Mapping[str, Any] | None = None,
    ) -> MatrixResponse:
        """Calculate distances between origins and destinations.

        Business logic:
        1. Join address lists with ``|``
        2. Merge default options with per-call options (per-call wins)
        3. Return the cached payload if caching is enabled and it exists
        4. Otherwise call the provider once and cache the payload

        Cache storage errors are logged, never raised: a failed read counts
        as a miss and a failed write still returns the fetched response.

        Args:
            origins: One address or a list of addresses
            destinations: One address or a list of addresses
            options: Per-call option overrides; None values drop an option

        Returns:
            MatrixResponse wrapping the decoded payload

        Raises:
            ValueError: If origins or destinations are empty
            InvalidOptionError: If a per-call option value is not recognized
            TransportError: If the HTTP request failed
            ParseError: If the response body is not JSON
            ApiStatusError: If the API status is not OK
        """
        joined_origins = join_addresses(origins)
        joined_destinations = join_addresses(destinations)
        if not joined_origins.strip():
            raise ValueError("At least one origin is required")
        if not joined_destinations.strip():
            raise ValueError("At least one destination is required")

        merged = self._options.merge(options)
        key = self.cache_key(self._identifier(joined_origins, joined_destinations, merged))

        if self._enable_cache:
            cached = self._load_cached(key)
            if cached is not None:
                logger.debug("Cache hit for %s", key)
                return MatrixResponse(cached)
            logger.debug("Cache miss for %s", key)

        params = {
            **merged,
            "origins": joined_origins,
            "destinations": joined_destinations,
            "key": self._api_key,
        }

        logger.info(
            "Requesting distance matrix (mode=%s, origins=%d, destinations=%d)",
            merged.get("mode"),
            joined_origins.count("|") + 1,
            joined_destinations.count("|") + 1,
        )
        data = self._provider.fetch(params)

        if self._enable_cache and self._repository is not None:
            try:
                self._repository.set(key, json.dumps(data), self._ttl)
            except Exception:
                logger.exception("Failed to store distance matrix response under %s", key)

        return MatrixResponse(data)

    def _load_cached(self, key: str) -> dict[str, Any] | None:
        if self._repository is None:
            return None
        try:
            raw = self._repository.get(key)
        except Exception:
            logger.exception("Failed to read cache entry %s", key)
            return None
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable cache entry %s", key)
            return None
        return data if isinstance(data, dict) else None

    def clear_cache(self, identifier: str | None = None) -> bool:
        """Clear cached responses.

        Args:
            identifier: Request identifier (see request_identifier). If None,
                        every entry in this client's namespace is deleted.

        Returns:
            With an identifier: True if that entry was deleted.
            Without one: True if the bulk delete finished without a storage error.
        """
        if self._repository is None:
            return False

        if identifier is not None:
            try:
                return self._repository.delete(self.cache_key(identifier))
            except Exception:
                logger.exception("Failed to delete cache entry for %s", identifier)
                return False

        try:
            count = self._repository.delete_by_prefix(self._prefix)
        except Exception:
            logger.exception("Failed to clear distance matrix cache")
            return False

        logger.info("Cleared %d cached distance matrix responses", count)
        return True

    def is_healthy(self) -> bool:
        """Check if the cache backend is reachable.

        Returns:
            True if caching is disabled or the repository is healthy
        """
        if not self._enable_cache or self._repository is None:
            return True
        return self._repository.health_check()

    def close(self) -> None:
        """Release the provider's network resources."""
        self._provider.close()

    @property
    def cache_enabled(self) -> bool:
        return self._enable_cache

    @property
    def cache_ttl(self) -> int:
        return self._ttl

    @property
    def cache_prefix(self) -> str:
        return self._prefix

    @property
    def repository(self) -> CacheStore | None:
        """Get the underlying repository (for testing)."""
        return self._repository

    @property
    def provider(self) -> MatrixProvider:
        """Get the underlying provider (for testing)."""
        return self._provider
