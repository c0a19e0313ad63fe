from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from distance_matrix.api.dependencies import HandlerDep, lifespan
from distance_matrix.config import settings
from distance_matrix.dto import (
    CalculateRequest,
    CalculateResponse,
    ClearCacheResponse,
    HealthCheckResponse,
)

app = FastAPI(
    title="Distance Matrix API",
    description="Google Distance Matrix client with response caching",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Distance Matrix API",
        "version": "0.1.0",
        "description": "Google Distance Matrix client with response caching",
        "endpoints": {
            "matrix": "/matrix",
            "cache": "/cache",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return handler.health_check()


@app.post("/matrix", response_model=CalculateResponse)
def calculate(request: CalculateRequest, handler: HandlerDep) -> CalculateResponse:
    """
    Calculate distances and durations between origins and destinations.

    Args:
        request: Addresses and travel options.

    Returns:
        Results table with one row per (origin, destination) pair.
    """
    return handler.calculate(request)


@app.delete("/cache", response_model=ClearCacheResponse)
def clear_cache(handler: HandlerDep, identifier: str | None = None) -> ClearCacheResponse:
    """Clear cached responses, or a single entry when an identifier is given."""
    return handler.clear_cache(identifier)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "distance_matrix.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
