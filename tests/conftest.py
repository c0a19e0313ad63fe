"""Shared fixtures for the distance matrix tests."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from distance_matrix.repositories import GoogleDistanceMatrixProvider, InMemoryCacheRepository
from distance_matrix.services import DistanceMatrixClient


def ok_element(meters: int, seconds: int) -> dict[str, Any]:
    """Build an OK matrix element."""
    return {
        "status": "OK",
        "distance": {"text": f"{meters / 1000:.1f} km", "value": meters},
        "duration": {"text": f"{seconds // 60} mins", "value": seconds},
    }


def failed_element(status: str = "ZERO_RESULTS") -> dict[str, Any]:
    """Build a matrix element without a route."""
    return {"status": status}


def make_payload(
    origins: list[str],
    destinations: list[str],
    grid: list[list[dict[str, Any]]],
    status: str = "OK",
) -> dict[str, Any]:
    """Build a Distance Matrix payload from a grid of elements."""
    return {
        "status": status,
        "origin_addresses": origins,
        "destination_addresses": destinations,
        "rows": [{"elements": row} for row in grid],
    }


@pytest.fixture
def two_by_one_payload() -> dict[str, Any]:
    """origins=[A, B], destinations=[C], both cells OK."""
    return make_payload(
        ["A, Country", "B, Country"],
        ["C, Country"],
        [[ok_element(12000, 900)], [ok_element(30500, 1800)]],
    )


class RecordingTransport:
    """Callable for httpx.MockTransport that records every request."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for a recording transport returning a JSON payload."""

    def factory(
        payload: Any = None,
        responder: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> RecordingTransport:
        if responder is None:
            responder = lambda request: httpx.Response(200, json=payload)  # noqa: E731
        return RecordingTransport(responder)

    return factory


def provider_for(transport: RecordingTransport) -> GoogleDistanceMatrixProvider:
    """Build a provider whose HTTP client goes through a mock transport."""
    return GoogleDistanceMatrixProvider(
        endpoint="https://maps.googleapis.com/maps/api/distancematrix/json",
        timeout=15,
        client=httpx.Client(transport=httpx.MockTransport(transport)),
    )


@pytest.fixture
def repository() -> InMemoryCacheRepository:
    return InMemoryCacheRepository()


@pytest.fixture
def make_client(repository: InMemoryCacheRepository) -> Callable[..., DistanceMatrixClient]:
    """Factory for a client wired to a mock transport and the in-memory repository."""

    def factory(
        transport: RecordingTransport,
        enable_cache: bool = True,
        api_key: str = "test-key",
    ) -> DistanceMatrixClient:
        return DistanceMatrixClient(
            api_key=api_key,
            provider=provider_for(transport),
            repository=repository,
            enable_cache=enable_cache,
            cache_ttl=86400,
        )

    return factory
