"""Repository layer for data access.

This layer abstracts external dependencies (Redis, the Google web service)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis -> in-memory, Google -> a test double)
- Unit testing with mock implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from distance_matrix.protocols import CacheStore, MatrixProvider

from .google_provider import GoogleDistanceMatrixProvider
from .memory_repository import InMemoryCacheRepository
from .redis_repository import RedisCacheRepository

__all__ = [
    "CacheStore",
    "MatrixProvider",
    "GoogleDistanceMatrixProvider",
    "InMemoryCacheRepository",
    "RedisCacheRepository",
]
