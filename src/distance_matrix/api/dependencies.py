"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from distance_matrix.config import settings
from distance_matrix.handlers import MatrixHandler
from distance_matrix.logger import setup_logging
from distance_matrix.services import DistanceMatrixClient

logger = logging.getLogger(__name__)


def get_client(request: Request) -> DistanceMatrixClient:
    """Dependency injection for DistanceMatrixClient from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The DistanceMatrixClient instance from app.state

    Raises:
        RuntimeError: If the client is not initialized
    """
    client = getattr(request.app.state, "matrix_client", None)
    if client is None:
        raise RuntimeError("DistanceMatrixClient not initialized. Check lifespan setup.")
    return client


def get_handler(request: Request) -> MatrixHandler:
    """Dependency injection for MatrixHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The MatrixHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "matrix_handler", None)
    if handler is None:
        raise RuntimeError("MatrixHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Client (business logic, with its provider and cache repository)
    2. Handler (HTTP endpoints) - stored in app.state.matrix_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes the HTTP client and removes services from app.state on shutdown
    """
    setup_logging()

    if not settings.google_maps_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not set; API requests will be denied")

    client = DistanceMatrixClient.create()
    handler = MatrixHandler(client=client)

    app.state.matrix_client = client
    app.state.matrix_handler = handler

    logger.info(
        "Distance matrix client initialized (cache=%s, backend=%s, ttl=%ds)",
        client.cache_enabled,
        settings.cache_backend,
        client.cache_ttl,
    )

    yield

    client.close()
    del app.state.matrix_handler
    del app.state.matrix_client
    logger.info("Distance matrix client shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[MatrixHandler, Depends(get_handler)]
ClientDep = Annotated[DistanceMatrixClient, Depends(get_client)]
