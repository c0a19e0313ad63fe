"""Matrix provider protocol.

Defines the interface for a remote service that answers distance matrix
queries with a decoded JSON payload.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MatrixProvider(Protocol):
    """Protocol for distance matrix backends.

    Example:
        ```python
        from distance_matrix.protocols import MatrixProvider

        provider: MatrixProvider = GoogleDistanceMatrixProvider.create()
        ```
    """

    def fetch(self, params: dict[str, Any]) -> dict[str, Any]:
        """Issue one request and return the decoded payload.

        Args:
            params: Query parameters, including origins, destinations and key

        Returns:
            The decoded JSON object, with top-level status OK

        Raises:
            TransportError: If the request itself failed
            ParseError: If the body is not a JSON object
            ApiStatusError: If the top-level status is not OK
        """
        ...

    def close(self) -> None:
        """Release network resources held by the provider."""
        ...
