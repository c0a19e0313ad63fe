"""Error types raised by the distance matrix client.

Every failure of a single ``calculate`` call is terminal; nothing is retried
internally. Per-element statuses (``ZERO_RESULTS``, ``NOT_FOUND``, ...) are not
errors and are exposed through ``MatrixResponse.element_status``.
"""


class DistanceMatrixError(Exception):
    """Base class for all distance matrix errors."""


class InvalidOptionError(DistanceMatrixError, ValueError):
    """An option value is not one of the recognized values."""

    def __init__(self, option: str, value: object, valid: tuple[str, ...] | None = None) -> None:
        self.option = option
        self.value = value
        self.valid = valid
        if valid:
            message = f"Invalid {option} {value!r}. Must be one of: {', '.join(valid)}"
        else:
            message = f"Invalid {option} {value!r}"
        super().__init__(message)


class TransportError(DistanceMatrixError):
    """The HTTP request failed before a response body was received."""


class ParseError(DistanceMatrixError):
    """The response body is not a JSON object."""


class ApiStatusError(DistanceMatrixError):
    """The API answered with a top-level status other than OK."""

    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        self.error_message = message
        text = f"Distance Matrix API returned error: {code}"
        if message:
            text += f" ({message})"
        super().__init__(text)
