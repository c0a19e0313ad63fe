"""Google Distance Matrix provider.

Issues a single GET against the Distance Matrix web service and returns the
decoded JSON body. Failures are mapped onto the package error types:

- network errors and timeouts -> TransportError
- a body that is not a JSON object -> ParseError
- a top-level status other than OK -> ApiStatusError

Nothing is retried here; retry policy belongs to the caller.
"""

import json
import logging
from typing import Any

import httpx

from distance_matrix.config import settings
from distance_matrix.errors import ApiStatusError, ParseError, TransportError

logger = logging.getLogger(__name__)


class GoogleDistanceMatrixProvider:
    """httpx-based implementation of the MatrixProvider protocol.

    This class satisfies the MatrixProvider protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        provider = GoogleDistanceMatrixProvider.create()
        data = provider.fetch({
            "origins": "Paris",
            "destinations": "Lyon",
            "mode": "driving",
            "key": "...",
        })
        ```
    """

    def __init__(
        self,
        endpoint: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            endpoint: API URL. Defaults to settings.api_endpoint.
            timeout: Request timeout in seconds. Defaults to settings.request_timeout.
            client: Pre-built httpx.Client (for custom transports in tests).
        """
        self._endpoint = endpoint or settings.api_endpoint
        self._timeout = timeout or settings.request_timeout
        self._client = client

    @classmethod
    def create(
        cls,
        endpoint: str | None = None,
        timeout: float | None = None,
    ) -> "GoogleDistanceMatrixProvider":
        """Factory method to create the provider with defaults.

        Args:
            endpoint: API URL. If None, uses settings.
            timeout: Timeout in seconds. If None, uses settings.

        Returns:
            Configured GoogleDistanceMatrixProvider
        """
        return cls(endpoint=endpoint, timeout=timeout)

    @property
    def client(self) -> httpx.Client:
        """Lazy-load the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def fetch(self, params: dict[str, Any]) -> dict[str, Any]:
        """Request a distance matrix.

        Args:
            params: Query parameters (origins, destinations, mode, units,
                    language, avoid, traffic_model, key)

        Returns:
            The decoded payload

        Raises:
            TransportError: If the HTTP request failed or timed out
            ParseError: If the body is not a JSON object
            ApiStatusError: If the API status is not OK
        """
        try:
            response = self.client.get(
                self._endpoint,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            logger.error("Distance Matrix request failed: %s", e)
            raise TransportError(f"Distance Matrix API request failed: {e}") from e

        try:
            data = json.loads(response.text)
        except json.JSONDecodeError as e:
            logger.error(
                "Distance Matrix response is not valid JSON (HTTP %d)", response.status_code
            )
            raise ParseError("Failed to parse Distance Matrix API response") from e

        if not isinstance(data, dict):
            raise ParseError("Failed to parse Distance Matrix API response")

        status = data.get("status") or "UNKNOWN_ERROR"
        if status != "OK":
            logger.warning("Distance Matrix API returned status %s", status)
            raise ApiStatusError(status, data.get("error_message"))

        return data

    def close(self) -> None:
        """Close the HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            self._client.close()
            self._client = None
