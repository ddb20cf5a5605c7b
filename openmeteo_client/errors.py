"""Exception hierarchy for the OpenMeteo client.

Every error raised by this package derives from OpenMeteoError so callers can
catch the whole family at once. Nothing is retried or recovered locally.
"""

from typing import Any


class OpenMeteoError(Exception):
    """Base class for all OpenMeteo client errors."""


class ValidationError(OpenMeteoError, ValueError):
    """Raised before any network activity when caller arguments are invalid."""


class TransportError(OpenMeteoError):
    """Raised when the API answers with a non-success HTTP status.

    Attributes:
        status_code (int): HTTP status code returned by the API.
        body (str): Raw response body, surfaced verbatim.
        reason (str | None): The "reason" field of OpenMeteo's JSON error
            document, if the body was one.
    """

    def __init__(self, status_code: int, body: str, reason: str | None = None):
        self.status_code = status_code
        self.body = body
        self.reason = reason

        detail = reason if reason else body
        super().__init__(f"OpenMeteo API request failed with status {status_code}: {detail}")


class NetworkError(OpenMeteoError):
    """Raised on connection-level failures (DNS, refusal, timeout)."""


class MalformedResponseError(OpenMeteoError):
    """Raised when a response body violates the expected shape."""

    def __init__(self, message: str, payload: Any = None):
        self.payload = payload
        super().__init__(message)


class LocationNotFoundError(OpenMeteoError):
    """Raised when a place name cannot be geocoded to coordinates."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Location not found: no geocoding result for {name!r}.")
