"""HTTP handlers for distance matrix operations.

Handlers convert between DTOs (API contracts) and client calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

from fastapi import HTTPException, status

from distance_matrix.dto import (
    NOT_AVAILABLE,
    CalculateRequest,
    CalculateResponse,
    ClearCacheResponse,
    HealthCheckResponse,
    MatrixCellItem,
)
from distance_matrix.entities import STATUS_OK, MatrixResponse
from distance_matrix.errors import (
    ApiStatusError,
    ParseError,
    TransportError,
)
from distance_matrix.services import DistanceMatrixClient


def build_rows(response: MatrixResponse) -> list[MatrixCellItem]:
    """Flatten a matrix into table rows, one per (origin, destination).

    Cells whose status is not OK keep their status and show 'Not Available'
    for distance and duration.
    """
    rows = []
    for i, origin in enumerate(response.origins):
        for j, destination in enumerate(response.destinations):
            element_status = response.element_status(i, j) or "NOT_FOUND"
            if element_status == STATUS_OK:
                rows.append(
                    MatrixCellItem(
                        origin_index=i,
                        destination_index=j,
                        origin=origin,
                        destination=destination,
                        distance=response.formatted_distance(i, j) or NOT_AVAILABLE,
                        duration=response.formatted_duration(i, j) or NOT_AVAILABLE,
                        distance_meters=response.distance_meters(i, j),
                        duration_seconds=response.duration_seconds(i, j),
                        status=element_status,
                        available=True,
                    )
                )
            else:
                rows.append(
                    MatrixCellItem(
                        origin_index=i,
                        destination_index=j,
                        origin=origin,
                        destination=destination,
                        distance=NOT_AVAILABLE,
                        duration=NOT_AVAILABLE,
                        status=element_status,
                        available=False,
                    )
                )
    return rows


class MatrixHandler:
    """HTTP handlers for distance matrix operations.

    This handler delegates business logic to DistanceMatrixClient
    and handles HTTP-specific concerns like:
    - Converting the matrix response to table DTOs
    - Setting appropriate status codes
    - Error handling and responses

    Example:
        ```python
        from distance_matrix.services import DistanceMatrixClient
        from distance_matrix.handlers import MatrixHandler

        client = DistanceMatrixClient.create()
        handler = MatrixHandler(client=client)

        # Use in FastAPI route
        @app.post("/matrix", response_model=CalculateResponse)
        def calculate(request: CalculateRequest):
            return handler.calculate(request)
        ```
    """

    def __init__(self, client: DistanceMatrixClient) -> None:
        """Initialize the matrix handler.

        Args:
            client: The distance matrix client for business logic (required).
        """
        self._client = client

    def calculate(self, request: CalculateRequest) -> CalculateResponse:
        """Handle POST /matrix requests.

        Args:
            request: The calculate request DTO

        Returns:
            CalculateResponse with one row per (origin, destination)

        Raises:
            HTTPException: 400 for invalid options, 502 for API or parse
                errors, 504 for transport failures
        """
        try:
            response = self._client.calculate(
                origins=request.origins,
                destinations=request.destinations,
                options=request.to_options(),
            )
        except ValueError as e:  # includes InvalidOptionError
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            ) from e
        except ApiStatusError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=str(e),
            ) from e
        except ParseError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=str(e),
            ) from e
        except TransportError as e:
            raise HTTPException(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                detail=str(e),
            ) from e

        origins = response.origins
        destinations = response.destinations
        is_complete = response.is_complete()

        summary = None
        if is_complete:
            summary = (
                f"Successfully calculated {len(response.all_distances())} routes between "
                f"{len(origins)} origins and {len(destinations)} destinations."
            )

        return CalculateResponse(
            origins=origins,
            destinations=destinations,
            rows=build_rows(response),
            is_complete=is_complete,
            summary=summary,
        )

    def clear_cache(self, identifier: str | None = None) -> ClearCacheResponse:
        """Handle DELETE /cache requests.

        Args:
            identifier: Optional request identifier to clear a single entry

        Returns:
            ClearCacheResponse with the clear operation result
        """
        if not self._client.cache_enabled:
            return ClearCacheResponse(success=False, message="Caching is disabled")

        success = self._client.clear_cache(identifier)

        if identifier is not None:
            message = "Cache entry cleared" if success else "Cache entry not found"
        elif success:
            message = "Cache cleared successfully"
        else:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to clear cache",
            )

        return ClearCacheResponse(success=success, message=message)

    def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Returns:
            HealthCheckResponse with cache status
        """
        cache_healthy = self._client.is_healthy()

        return HealthCheckResponse(
            status="healthy" if cache_healthy else "unhealthy",
            cache_enabled=self._client.cache_enabled,
            cache_healthy=cache_healthy,
        )
