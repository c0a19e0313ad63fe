"""
Tests for the distance matrix API.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import failed_element, make_payload, ok_element
from distance_matrix.api.app import app
from distance_matrix.api.dependencies import get_handler
from distance_matrix.handlers import MatrixHandler


@pytest.fixture
def use_transport(make_client):
    """Wire the app's handler to a client that talks to the given transport."""

    def wire(transport, enable_cache=True):
        matrix_client = make_client(transport, enable_cache=enable_cache)
        app.dependency_overrides[get_handler] = lambda: MatrixHandler(matrix_client)
        return matrix_client

    yield wire
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    """Create a test client without running the lifespan."""
    return TestClient(app)


@pytest.fixture
def partial_payload():
    """A, B -> C, D with the (B, D) cell unreachable."""
    return make_payload(
        ["A", "B"],
        ["C", "D"],
        [
            [ok_element(12000, 900), ok_element(8000, 600)],
            [ok_element(30500, 1800), failed_element("ZERO_RESULTS")],
        ],
    )


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Distance Matrix API"
    assert data["endpoints"]["matrix"] == "/matrix"


def test_health(client, use_transport, make_transport, two_by_one_payload):
    """Test health check endpoint."""
    use_transport(make_transport(two_by_one_payload))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "cache_enabled": True, "cache_healthy": True}


def test_matrix_partial_results(client, use_transport, make_transport, partial_payload):
    """Test that failed cells are listed as Not Available and no summary is given."""
    transport = make_transport(partial_payload)
    use_transport(transport)

    response = client.post(
        "/matrix",
        json={"origins": "A | B", "destinations": ["C", "D"], "mode": "walking"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["is_complete"] is False
    assert data["summary"] is None
    assert len(data["rows"]) == 4
    assert [(row["origin_index"], row["destination_index"]) for row in data["rows"]] == [
        (0, 0),
        (0, 1),
        (1, 0),
        (1, 1),
    ]

    failed = data["rows"][3]
    assert failed["status"] == "ZERO_RESULTS"
    assert failed["available"] is False
    assert failed["distance"] == "Not Available"
    assert failed["duration"] == "Not Available"
    assert failed["distance_meters"] is None

    first = data["rows"][0]
    assert first["distance"] == "12.0 km"
    assert first["duration_seconds"] == 900

    params = transport.requests[0].url.params
    assert params["origins"] == "A|B"
    assert params["mode"] == "walking"


def test_matrix_complete_has_summary(client, use_transport, make_transport, two_by_one_payload):
    """Test the summary line of a complete matrix."""
    use_transport(make_transport(two_by_one_payload))

    response = client.post("/matrix", json={"origins": ["A", "B"], "destinations": ["C"]})

    assert response.status_code == 200
    data = response.json()
    assert data["is_complete"] is True
    assert data["summary"] == (
        "Successfully calculated 2 routes between 2 origins and 1 destinations."
    )


@pytest.mark.parametrize(
    "body",
    [
        {"origins": ["A"], "destinations": ["C"], "mode": "flying"},
        {"origins": ["A"], "destinations": ["C"], "avoid": "bridges"},
        {"origins": [], "destinations": ["C"]},
        {"origins": " | ", "destinations": ["C"]},
        {"destinations": ["C"]},
    ],
)
def test_matrix_validation_errors(client, use_transport, make_transport, two_by_one_payload, body):
    """Test that invalid requests are rejected before any API call."""
    transport = make_transport(two_by_one_payload)
    use_transport(transport)

    response = client.post("/matrix", json=body)

    assert response.status_code == 422
    assert transport.calls == 0


def test_matrix_api_status_error(client, use_transport, make_transport):
    """Test that a denied request maps to 502."""
    use_transport(make_transport({"status": "REQUEST_DENIED", "error_message": "Bad key"}))

    response = client.post("/matrix", json={"origins": ["A"], "destinations": ["C"]})

    assert response.status_code == 502
    assert "REQUEST_DENIED" in response.json()["detail"]


def test_matrix_parse_error(client, use_transport, make_transport):
    """Test that a non-JSON body maps to 502."""
    use_transport(make_transport(responder=lambda r: httpx.Response(200, text="oops")))

    response = client.post("/matrix", json={"origins": ["A"], "destinations": ["C"]})

    assert response.status_code == 502


def test_matrix_transport_error(client, use_transport, make_transport):
    """Test that a network failure maps to 504."""

    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    use_transport(make_transport(responder=unreachable))

    response = client.post("/matrix", json={"origins": ["A"], "destinations": ["C"]})

    assert response.status_code == 504


def test_matrix_uses_cache(client, use_transport, make_transport, two_by_one_payload):
    """Test that a repeated request is served from cache."""
    transport = make_transport(two_by_one_payload)
    use_transport(transport)
    body = {"origins": ["A", "B"], "destinations": ["C"]}

    first = client.post("/matrix", json=body)
    second = client.post("/matrix", json=body)

    assert first.json() == second.json()
    assert transport.calls == 1


def test_clear_cache(client, use_transport, make_transport, two_by_one_payload):
    """Test clearing the whole cache."""
    transport = make_transport(two_by_one_payload)
    use_transport(transport)
    body = {"origins": ["A", "B"], "destinations": ["C"]}
    client.post("/matrix", json=body)

    response = client.delete("/cache")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Cache cleared successfully"}

    client.post("/matrix", json=body)
    assert transport.calls == 2


def test_clear_cache_single_entry(client, use_transport, make_transport, two_by_one_payload):
    """Test clearing one entry by request identifier."""
    matrix_client = use_transport(make_transport(two_by_one_payload))
    client.post("/matrix", json={"origins": ["A"], "destinations": ["C"]})
    identifier = matrix_client.request_identifier(
        ["A"], ["C"], {"mode": "driving", "units": "metric", "language": "en"}
    )

    first = client.delete("/cache", params={"identifier": identifier})
    second = client.delete("/cache", params={"identifier": identifier})

    assert first.json() == {"success": True, "message": "Cache entry cleared"}
    assert second.json() == {"success": False, "message": "Cache entry not found"}


def test_clear_cache_disabled(client, use_transport, make_transport, two_by_one_payload):
    """Test that clearing reports disabled caching."""
    use_transport(make_transport(two_by_one_payload), enable_cache=False)

    response = client.delete("/cache")

    assert response.status_code == 200
    assert response.json() == {"success": False, "message": "Caching is disabled"}


def test_lifespan_wires_services():
    """Test that startup stores the handler in app.state and shutdown removes it."""
    with TestClient(app) as test_client:
        assert isinstance(app.state.matrix_handler, MatrixHandler)
        assert test_client.get("/").status_code == 200

    assert getattr(app.state, "matrix_handler", None) is None


def test_matrix_missing_rows_has_no_summary(client, use_transport, make_transport):
    """Test that a payload without rows renders Not Available cells and no summary."""
    use_transport(make_transport(make_payload(["A", "B"], ["C"], [])))

    response = client.post("/matrix", json={"origins": ["A", "B"], "destinations": ["C"]})

    assert response.status_code == 200
    data = response.json()
    assert data["is_complete"] is False
    assert data["summary"] is None
    assert [row["distance"] for row in data["rows"]] == ["Not Available", "Not Available"]
