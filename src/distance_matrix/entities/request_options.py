"""Request option entities."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from distance_matrix.errors import InvalidOptionError


class TravelMode(str, Enum):
    """Travel modes accepted by the Distance Matrix API."""

    DRIVING = "driving"
    WALKING = "walking"
    BICYCLING = "bicycling"
    TRANSIT = "transit"


class Units(str, Enum):
    """Unit systems for the formatted ``text`` fields."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class Avoid(str, Enum):
    """Route features that can be avoided."""

    TOLLS = "tolls"
    HIGHWAYS = "highways"
    FERRIES = "ferries"


class TrafficModel(str, Enum):
    """Traffic models for driving duration estimates."""

    BEST_GUESS = "best_guess"
    PESSIMISTIC = "pessimistic"
    OPTIMISTIC = "optimistic"


# Option name -> enum of valid values
OPTION_ENUMS: dict[str, type[Enum]] = {
    "mode": TravelMode,
    "units": Units,
    "avoid": Avoid,
    "traffic_model": TrafficModel,
}


def validate_option(option: str, value: Any) -> Any:
    """Validate a single option value.

    Enum-backed options accept either the enum member or its string value and
    are normalized to the plain string. ``language`` must be a non-empty string.
    Any other option is passed through untouched.

    Raises:
        InvalidOptionError: If the value is not recognized for the option
    """
    enum_cls = OPTION_ENUMS.get(option)
    if enum_cls is not None:
        raw = value.value if isinstance(value, enum_cls) else value
        valid = tuple(member.value for member in enum_cls)
        if raw not in valid:
            raise InvalidOptionError(option, value, valid)
        return raw

    if option == "language":
        if not isinstance(value, str) or not value.strip():
            raise InvalidOptionError(option, value)
        return value.strip()

    return value


def normalize_options(options: Mapping[str, Any] | None) -> dict[str, Any]:
    """Validate a per-call option mapping.

    ``None`` values are kept; they mean "leave this option out of the request".
    """
    normalized: dict[str, Any] = {}
    for name, value in (options or {}).items():
        normalized[name] = None if value is None else validate_option(name, value)
    return normalized


@dataclass(frozen=True)
class RequestOptions:
    """Validated default options of a client.

    Instances are immutable: each ``with_*`` method validates the new value
    and returns a new instance, so an invalid value never replaces a valid one.

    Attributes:
        mode: Travel mode
        units: Unit system for formatted text
        language: Language code for addresses and text
        avoid: Feature to avoid, or None
        traffic_model: Traffic model, or None
    """

    mode: str = TravelMode.DRIVING.value
    units: str = Units.METRIC.value
    language: str = "en"
    avoid: str | None = None
    traffic_model: str | None = None

    def with_mode(self, mode: TravelMode | str) -> "RequestOptions":
        return replace(self, mode=validate_option("mode", mode))

    def with_units(self, units: Units | str) -> "RequestOptions":
        return replace(self, units=validate_option("units", units))

    def with_language(self, language: str) -> "RequestOptions":
        return replace(self, language=validate_option("language", language))

    def with_avoid(self, avoid: Avoid | str | None) -> "RequestOptions":
        if avoid is None:
            return replace(self, avoid=None)
        return replace(self, avoid=validate_option("avoid", avoid))

    def with_traffic_model(self, model: TrafficModel | str | None) -> "RequestOptions":
        if model is None:
            return replace(self, traffic_model=None)
        return replace(self, traffic_model=validate_option("traffic_model", model))

    def as_params(self) -> dict[str, str]:
        """Return the options as request parameters, without unset values."""
        params = {
            "mode": self.mode,
            "units": self.units,
            "language": self.language,
            "avoid": self.avoid,
            "traffic_model": self.traffic_model,
        }
        return {name: value for name, value in params.items() if value is not None}

    def merge(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Merge per-call overrides over these options.

        Override values win on key collision. An override of ``None`` removes
        the option from the result.

        Raises:
            InvalidOptionError: If an override value is not recognized
        """
        merged: dict[str, Any] = self.as_params()
        for name, value in normalize_options(overrides).items():
            if value is None:
                merged.pop(name, None)
            else:
                merged[name] = value
        return merged
