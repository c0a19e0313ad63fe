"""Domain entities for internal representation.

These are plain classes and frozen dataclasses used by the service layer.
They are NOT used for API contracts - use DTOs from the dto package for that.

Entities should have:
- No Pydantic validation
- No I/O (HTTP, cache)
- Pure domain logic only
"""

from .matrix_response import STATUS_OK, DistanceRecord, MatrixResponse, NearestDestination
from .request_options import (
    Avoid,
    RequestOptions,
    TrafficModel,
    TravelMode,
    Units,
    normalize_options,
    validate_option,
)

__all__ = [
    "STATUS_OK",
    "MatrixResponse",
    "DistanceRecord",
    "NearestDestination",
    "RequestOptions",
    "TravelMode",
    "Units",
    "Avoid",
    "TrafficModel",
    "normalize_options",
    "validate_option",
]
