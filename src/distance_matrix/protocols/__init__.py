"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis -> in-memory, Google -> a test double)
- Unit testing with mock implementations
- Clear separation of concerns

Usage:
    ```python
    from distance_matrix.protocols import CacheStore, MatrixProvider

    store: CacheStore = RedisCacheRepository.create()
    provider: MatrixProvider = GoogleDistanceMatrixProvider.create()
    ```
"""

from .cache_store import CacheStore
from .matrix_provider import MatrixProvider

__all__ = [
    "CacheStore",
    "MatrixProvider",
]
