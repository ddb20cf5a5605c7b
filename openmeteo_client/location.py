"""Location handling: coordinate pairs, place names and geocoding.

Callers may pass a location either as a (latitude, longitude) pair or as a
place name. Both are converted to a tagged variant, Coordinates | PlaceName,
and place names are resolved to Coordinates through the OpenMeteo geocoding
API before any weather request is built.
"""

import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, List, Union

import requests

from openmeteo_client.config import GEOCODING_URL
from openmeteo_client.errors import LocationNotFoundError, ValidationError
from openmeteo_client.transport import get_json


@dataclass(frozen=True)
class Coordinates:
    """WGS84 coordinate pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class PlaceName:
    """Free-text place name, resolved by the geocoder."""

    name: str


Location = Union[Coordinates, PlaceName]


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def to_location(value: Any) -> Location:
    """Convert raw caller input into a Coordinates or PlaceName.

    Args:
        value (Any): A Coordinates/PlaceName instance, a place name string, or
            a (latitude, longitude) sequence of two numbers.

    Returns:
        Location: The tagged location.

    Raises:
        ValidationError: When value is none of the accepted forms.
    """
    if isinstance(value, (Coordinates, PlaceName)):
        return value

    if isinstance(value, str):
        if not value.strip():
            raise ValidationError("Location name must not be empty.")
        return PlaceName(value)

    if isinstance(value, (tuple, list)) and len(value) == 2 and all(_is_number(v) for v in value):
        return Coordinates(latitude=float(value[0]), longitude=float(value[1]))

    raise ValidationError(
        f"Location must be a (latitude, longitude) pair or a place name. Received {value!r} instead."
    )


class Geocoder:
    """Client for the OpenMeteo geocoding API.

    Example:
        geocoder = Geocoder()
        coordinates = geocoder.resolve("Indianapolis")
    """

    def __init__(self, session: requests.Session | None = None, url: str = GEOCODING_URL):
        self.session = session if session is not None else requests.Session()
        self.url = url
        self.logger = logging.getLogger(name=self.__class__.__name__)

    def search(self, name: str, n_results: int = 1, language: str = "en") -> List[Dict[str, Any]]:
        """Return raw geocoding results for a place name.

        Args:
            name (str): Place name to look up.
            n_results (int): Maximum number of results to return.
            language (str): Language of the returned place names.

        Returns:
            List[Dict[str, Any]]: Result records as returned by the API
                (name, latitude, longitude, country, timezone, ...). Empty when
                nothing matched.
        """
        params = {
            "name": name,
            "count": n_results,
            "language": language,
            "format": "json",
        }

        self.logger.info(f"Geocoding location {name!r}")

        payload = get_json(self.session, self.url, params, self.logger)

        # The API omits "results" entirely when nothing matches.
        return list(payload.get("results") or []) if isinstance(payload, dict) else []

    def resolve(self, name: str) -> Coordinates:
        """Resolve a place name to the coordinates of its best match.

        Raises:
            LocationNotFoundError: When the geocoder returns no result.
        """
        results = self.search(name, n_results=1)

        if not results:
            raise LocationNotFoundError(name)

        best = results[0]
        coordinates = Coordinates(latitude=float(best["latitude"]), longitude=float(best["longitude"]))

        self.logger.info(
            f"Resolved {name!r} to Lat.: {coordinates.latitude}° (N), Lon.: {coordinates.longitude}° (E)"
        )

        return coordinates


def resolve_location(location: Location, geocoder: Geocoder) -> Coordinates:
    """Return Coordinates for a tagged location, geocoding place names."""
    if isinstance(location, Coordinates):
        return location

    return geocoder.resolve(location.name)
