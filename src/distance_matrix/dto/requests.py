"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field, field_validator

from distance_matrix.entities import Avoid, TrafficModel, TravelMode, Units


def split_addresses(value: str | list[str]) -> list[str]:
    """Accept a list or a ``|``-separated string; trim entries and drop empty ones."""
    parts = value.split("|") if isinstance(value, str) else value
    return [part.strip() for part in parts if part and part.strip()]


class CalculateRequest(BaseModel):
    """Request DTO for a distance matrix calculation.

    The handler will convert this to a call on the client.
    """

    origins: list[str] = Field(
        ...,
        description="Origin addresses, as a list or a single string separated by |",
        min_length=1,
    )
    destinations: list[str] = Field(
        ...,
        description="Destination addresses, as a list or a single string separated by |",
        min_length=1,
    )
    mode: TravelMode = Field(TravelMode.DRIVING, description="Travel mode")
    units: Units = Field(Units.METRIC, description="Unit system for formatted text")
    language: str = Field("en", description="Language code for results", min_length=1)
    avoid: Avoid | None = Field(None, description="Feature to avoid (if null, none)")
    traffic_model: TrafficModel | None = Field(
        None,
        description="Traffic model for driving estimates (if null, API default)",
    )

    @field_validator("origins", "destinations", mode="before")
    @classmethod
    def _split(cls, value: object) -> object:
        if isinstance(value, (str, list)):
            return split_addresses(value)
        return value

    def to_options(self) -> dict[str, str | None]:
        """Per-call options for the client."""
        return {
            "mode": self.mode.value,
            "units": self.units.value,
            "language": self.language,
            "avoid": self.avoid.value if self.avoid else None,
            "traffic_model": self.traffic_model.value if self.traffic_model else None,
        }
