"""Distance matrix response entity."""

import copy
from dataclasses import dataclass
from typing import Any

STATUS_OK = "OK"


@dataclass(frozen=True)
class DistanceRecord:
    """One successful (origin, destination) cell of the matrix.

    Attributes:
        origin_index: Row index of the origin
        destination_index: Column index of the destination
        origin: Origin address as resolved by the API
        destination: Destination address as resolved by the API
        distance: Distance sub-object ({"text": ..., "value": meters})
        duration: Duration sub-object ({"text": ..., "value": seconds})
    """

    origin_index: int
    destination_index: int
    origin: str | None
    destination: str | None
    distance: dict[str, Any]
    duration: dict[str, Any]


@dataclass(frozen=True)
class NearestDestination:
    """The closest destination found for an origin."""

    destination_index: int
    destination: str | None
    distance: dict[str, Any]
    duration: dict[str, Any]


class MatrixResponse:
    """Read-only view over a decoded Distance Matrix payload.

    The grid is indexed ``[origin_index][destination_index]``. Accessors never
    raise for indices outside the grid; they return None instead. Cells whose
    status is not OK carry no distance or duration.

    Example:
        ```python
        response = client.calculate(["Paris"], ["Lyon", "Nice"])
        response.formatted_distance(0, 1)  # "932 km"
        response.find_nearest_destination(0).destination  # "Lyon, France"
        ```
    """

    def __init__(self, data: dict[str, Any]) -> None:
        """Initialize the response.

        Args:
            data: Decoded JSON payload. It is copied, later changes to the
                  caller's dict do not affect this response.
        """
        self._data = copy.deepcopy(data)

    @property
    def raw(self) -> dict[str, Any]:
        """Copy of the full decoded payload."""
        return copy.deepcopy(self._data)

    @property
    def status(self) -> str | None:
        """Top-level API status."""
        return self._data.get("status")

    @property
    def origins(self) -> list[str]:
        """Resolved origin addresses, empty if absent."""
        return list(self._data.get("origin_addresses") or [])

    @property
    def destinations(self) -> list[str]:
        """Resolved destination addresses, empty if absent."""
        return list(self._data.get("destination_addresses") or [])

    @property
    def rows(self) -> list[dict[str, Any]]:
        """Copy of the matrix rows, empty if absent."""
        return copy.deepcopy(self._data.get("rows") or [])

    @property
    def dimensions(self) -> tuple[int, int]:
        """(number of origins, number of destinations)."""
        return len(self.origins), len(self.destinations)

    def _row_elements(self, origin_index: int) -> list[dict[str, Any]]:
        rows = self._data.get("rows") or []
        if not 0 <= origin_index < len(rows):
            return []
        row = rows[origin_index]
        if not isinstance(row, dict):
            return []
        return row.get("elements") or []

    def _cell(self, origin_index: int, destination_index: int) -> dict[str, Any] | None:
        elements = self._row_elements(origin_index)
        if not 0 <= destination_index < len(elements):
            return None
        element = elements[destination_index]
        return element if isinstance(element, dict) else None

    def _ok_cell(self, origin_index: int, destination_index: int) -> dict[str, Any] | None:
        element = self._cell(origin_index, destination_index)
        if element is None or element.get("status") != STATUS_OK:
            return None
        return element

    def _address(self, addresses: list[str], index: int) -> str | None:
        return addresses[index] if 0 <= index < len(addresses) else None

    def element(self, origin_index: int = 0, destination_index: int = 0) -> dict[str, Any] | None:
        """Get a cell of the matrix, or None if it does not exist."""
        element = self._cell(origin_index, destination_index)
        return copy.deepcopy(element) if element is not None else None

    def element_status(self, origin_index: int = 0, destination_index: int = 0) -> str | None:
        """Get the per-cell status, or None if the cell does not exist."""
        element = self._cell(origin_index, destination_index)
        return element.get("status") if element is not None else None

    def distance(self, origin_index: int = 0, destination_index: int = 0) -> dict[str, Any] | None:
        """Get the distance sub-object of an OK cell."""
        element = self._ok_cell(origin_index, destination_index)
        if element is None or not element.get("distance"):
            return None
        return dict(element["distance"])

    def duration(self, origin_index: int = 0, destination_index: int = 0) -> dict[str, Any] | None:
        """Get the duration sub-object of an OK cell."""
        element = self._ok_cell(origin_index, destination_index)
        if element is None or not element.get("duration"):
            return None
        return dict(element["duration"])

    def formatted_distance(self, origin_index: int = 0, destination_index: int = 0) -> str | None:
        distance = self.distance(origin_index, destination_index)
        return distance.get("text") if distance else None

    def distance_meters(self, origin_index: int = 0, destination_index: int = 0) -> int | None:
        distance = self.distance(origin_index, destination_index)
        return distance.get("value") if distance else None

    def formatted_duration(self, origin_index: int = 0, destination_index: int = 0) -> str | None:
        duration = self.duration(origin_index, destination_index)
        return duration.get("text") if duration else None

    def duration_seconds(self, origin_index: int = 0, destination_index: int = 0) -> int | None:
        duration = self.duration(origin_index, destination_index)
        return duration.get("value") if duration else None

    def is_complete(self) -> bool:
        """Check that every cell in the grid has status OK.

        The grid spans the declared origins and destinations; a cell missing
        from the rows counts as not OK. An empty grid is complete.
        """
        origin_count, destination_count = self.dimensions
        origin_count = max(origin_count, len(self._data.get("rows") or []))
        for origin_index in range(origin_count):
            elements = self._row_elements(origin_index)
            for destination_index in range(max(destination_count, len(elements))):
                if self._ok_cell(origin_index, destination_index) is None:
                    return False
        return True

    def all_distances(self) -> list[DistanceRecord]:
        """List every OK cell in row-major order.

        Returns:
            One DistanceRecord per OK cell, origins first then destinations
        """
        origins = self.origins
        destinations = self.destinations
        records = []
        for origin_index in range(len(self._data.get("rows") or [])):
            for destination_index in range(len(self._row_elements(origin_index))):
                element = self._ok_cell(origin_index, destination_index)
                if element is None:
                    continue
                records.append(
                    DistanceRecord(
                        origin_index=origin_index,
                        destination_index=destination_index,
                        origin=self._address(origins, origin_index),
                        destination=self._address(destinations, destination_index),
                        distance=dict(element.get("distance") or {}),
                        duration=dict(element.get("duration") or {}),
                    )
                )
        return records

    def find_nearest_destination(self, origin_index: int = 0) -> NearestDestination | None:
        """Find the destination with the smallest distance from an origin.

        Only OK cells with a numeric distance are considered. On ties the
        first destination wins.

        Args:
            origin_index: Row index of the origin

        Returns:
            NearestDestination, or None if the row has no OK cell
        """
        destinations = self.destinations
        nearest: NearestDestination | None = None
        min_distance: float | None = None

        for destination_index in range(len(self._row_elements(origin_index))):
            element = self._ok_cell(origin_index, destination_index)
            if element is None:
                continue
            value = (element.get("distance") or {}).get("value")
            if not isinstance(value, (int, float)):
                continue
            if min_distance is None or value < min_distance:
                min_distance = value
                nearest = NearestDestination(
                    destination_index=destination_index,
                    destination=self._address(destinations, destination_index),
                    distance=dict(element["distance"]),
                    duration=dict(element.get("duration") or {}),
                )

        return nearest

    # get_* aliases
    def get_all(self) -> dict[str, Any]:
        return self.raw

    def get_origins(self) -> list[str]:
        return self.origins

    def get_destinations(self) -> list[str]:
        return self.destinations

    def get_rows(self) -> list[dict[str, Any]]:
        return self.rows

    def get_element(self, origin_index: int = 0, destination_index: int = 0) -> dict[str, Any] | None:
        return self.element(origin_index, destination_index)

    def get_element_status(self, origin_index: int = 0, destination_index: int = 0) -> str | None:
        return self.element_status(origin_index, destination_index)

    def get_distance(self, origin_index: int = 0, destination_index: int = 0) -> dict[str, Any] | None:
        return self.distance(origin_index, destination_index)

    def get_duration(self, origin_index: int = 0, destination_index: int = 0) -> dict[str, Any] | None:
        return self.duration(origin_index, destination_index)

    def get_formatted_distance(self, origin_index: int = 0, destination_index: int = 0) -> str | None:
        return self.formatted_distance(origin_index, destination_index)

    def get_distance_meters(self, origin_index: int = 0, destination_index: int = 0) -> int | None:
        return self.distance_meters(origin_index, destination_index)

    def get_formatted_duration(self, origin_index: int = 0, destination_index: int = 0) -> str | None:
        return self.formatted_duration(origin_index, destination_index)

    def get_duration_seconds(self, origin_index: int = 0, destination_index: int = 0) -> int | None:
        return self.duration_seconds(origin_index, destination_index)

    def get_all_distances(self) -> list[DistanceRecord]:
        return self.all_distances()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatrixResponse):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows, cols = self.dimensions
        return f"MatrixResponse(status={self.status!r}, origins={rows}, destinations={cols})"
