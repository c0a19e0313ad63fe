"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import CalculateRequest, split_addresses
from .responses import (
    NOT_AVAILABLE,
    CalculateResponse,
    ClearCacheResponse,
    HealthCheckResponse,
    MatrixCellItem,
)

__all__ = [
    "CalculateRequest",
    "split_addresses",
    "NOT_AVAILABLE",
    "MatrixCellItem",
    "CalculateResponse",
    "ClearCacheResponse",
    "HealthCheckResponse",
]
