"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository / Provider
    (HTTP)  -> (Business) -> (Cache / Google web service)

Usage:
    ```python
    from distance_matrix.services import DistanceMatrixClient

    # Using factory method (recommended)
    client = DistanceMatrixClient.create(api_key="...")
    client = DistanceMatrixClient.create(api_key="...", enable_cache=False)

    # Or manual creation
    client = DistanceMatrixClient(api_key="...", provider=provider, repository=repo)
    ```
"""

from .distance_matrix_client import DistanceMatrixClient, canonical_json, join_addresses

__all__ = [
    "DistanceMatrixClient",
    "canonical_json",
    "join_addresses",
]
