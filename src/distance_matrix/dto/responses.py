"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field

NOT_AVAILABLE = "Not Available"


class MatrixCellItem(BaseModel):
    """One (origin, destination) row of the results table."""

    origin_index: int = Field(..., description="Index of the origin", ge=0)
    destination_index: int = Field(..., description="Index of the destination", ge=0)
    origin: str = Field(..., description="Origin address as resolved by the API")
    destination: str = Field(..., description="Destination address as resolved by the API")
    distance: str = Field(..., description="Formatted distance, or 'Not Available'")
    duration: str = Field(..., description="Formatted duration, or 'Not Available'")
    distance_meters: int | None = Field(None, description="Distance in meters", ge=0)
    duration_seconds: int | None = Field(None, description="Duration in seconds", ge=0)
    status: str = Field(..., description="Element status (OK, NOT_FOUND, ZERO_RESULTS, ...)")
    available: bool = Field(..., description="Whether the element status is OK")


class CalculateResponse(BaseModel):
    """Response DTO for a distance matrix calculation.

    Rows are listed origin by origin, then destination by destination.
    Cells that failed are still listed, with 'Not Available' values.
    """

    origins: list[str] = Field(default_factory=list, description="Resolved origin addresses")
    destinations: list[str] = Field(
        default_factory=list,
        description="Resolved destination addresses",
    )
    rows: list[MatrixCellItem] = Field(default_factory=list, description="Results table")
    is_complete: bool = Field(..., description="Whether every element status is OK")
    summary: str | None = Field(
        None,
        description="Summary line, only set when the matrix is complete",
    )


class ClearCacheResponse(BaseModel):
    """Response DTO for cache clearing."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable status message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_enabled: bool = Field(..., description="Whether response caching is enabled")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
