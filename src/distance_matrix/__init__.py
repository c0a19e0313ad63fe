"""Distance Matrix - Google Distance Matrix API client with response caching.

This package provides a layered architecture around a single API round trip:

Layers:
    - protocols: Interface contracts (CacheStore, MatrixProvider)
    - repositories: Data access implementations (Redis, in-memory, Google)
    - services: Business logic (DistanceMatrixClient)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (MatrixResponse, RequestOptions)

Usage:
    ```python
    from distance_matrix.services import DistanceMatrixClient

    client = DistanceMatrixClient.create(api_key="...")
    response = client.set_mode("driving").calculate(["A", "B"], ["C"])
    response.formatted_distance(0, 0)
    ```

For HTTP API:
    ```python
    from distance_matrix.api.app import app
    ```
"""

from distance_matrix.config import get_redis_client, settings
from distance_matrix.dto import CalculateRequest, CalculateResponse
from distance_matrix.entities import (
    Avoid,
    DistanceRecord,
    MatrixResponse,
    NearestDestination,
    RequestOptions,
    TrafficModel,
    TravelMode,
    Units,
)
from distance_matrix.errors import (
    ApiStatusError,
    DistanceMatrixError,
    InvalidOptionError,
    ParseError,
    TransportError,
)
from distance_matrix.handlers import MatrixHandler
from distance_matrix.protocols import CacheStore, MatrixProvider
from distance_matrix.repositories import (
    GoogleDistanceMatrixProvider,
    InMemoryCacheRepository,
    RedisCacheRepository,
)
from distance_matrix.services import DistanceMatrixClient

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CacheStore",
    "MatrixProvider",
    # Services (business logic)
    "DistanceMatrixClient",
    # Handlers (HTTP)
    "MatrixHandler",
    # Repositories (data access)
    "RedisCacheRepository",
    "InMemoryCacheRepository",
    "GoogleDistanceMatrixProvider",
    # Entities (domain models)
    "MatrixResponse",
    "DistanceRecord",
    "NearestDestination",
    "RequestOptions",
    "TravelMode",
    "Units",
    "Avoid",
    "TrafficModel",
    # Errors
    "DistanceMatrixError",
    "InvalidOptionError",
    "TransportError",
    "ParseError",
    "ApiStatusError",
    # DTOs (API contracts)
    "CalculateRequest",
    "CalculateResponse",
]
