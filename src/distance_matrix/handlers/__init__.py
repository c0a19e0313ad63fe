"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .matrix_handler import MatrixHandler, build_rows

__all__ = [
    "MatrixHandler",
    "build_rows",
]
