"""Tests for location parsing and geocoding."""

import pytest

from openmeteo_client import Coordinates, Geocoder, LocationNotFoundError, PlaceName, ValidationError
from openmeteo_client.location import resolve_location, to_location

from conftest import make_response


class TestToLocation:
    """Raw caller input becomes Coordinates or PlaceName."""

    @pytest.mark.parametrize("value", [(39, -86), [39.0, -86.0]])
    def test_pair(self, value):
        """Two numbers form a coordinate pair."""
        assert to_location(value) == Coordinates(latitude=39.0, longitude=-86.0)

    def test_name(self):
        """A string is a place name."""
        assert to_location("Indianapolis") == PlaceName("Indianapolis")

    def test_passthrough(self):
        """Tagged values are returned unchanged."""
        location = Coordinates(1.0, 2.0)

        assert to_location(location) is location

    @pytest.mark.parametrize("value", [None, "", "   ", (39,), (39, -86, 0), ("39", "-86"), (True, False), 39.0])
    def test_invalid(self, value):
        """Anything else is rejected."""
        with pytest.raises(ValidationError):
            to_location(value)


class TestGeocoder:
    """Geocoder against a mocked session."""

    def test_search_params(self, session):
        """The search sends name, count, language and format."""
        session.get.return_value = make_response({"results": [{"latitude": 1.0, "longitude": 2.0}]})

        results = Geocoder(session=session).search("Berlin", n_results=3, language="de")

        assert results == [{"latitude": 1.0, "longitude": 2.0}]
        args, kwargs = session.get.call_args
        assert args[0] == "https://geocoding-api.open-meteo.com/v1/search"
        assert kwargs["params"] == {"name": "Berlin", "count": 3, "language": "de", "format": "json"}

    def test_resolve_first_result(self, session):
        """resolve() returns the best match."""
        session.get.return_value = make_response(
            {
                "results": [
                    {"name": "Berlin", "latitude": 52.52437, "longitude": 13.41053},
                    {"name": "Berlin", "latitude": 44.46867, "longitude": -71.18508},
                ]
            }
        )

        assert Geocoder(session=session).resolve("Berlin") == Coordinates(52.52437, 13.41053)

    def test_not_found(self, session):
        """No results raises LocationNotFoundError."""
        session.get.return_value = make_response({"generationtime_ms": 0.3})

        with pytest.raises(LocationNotFoundError) as excinfo:
            Geocoder(session=session).resolve("Atlantis")

        assert excinfo.value.name == "Atlantis"

    def test_resolve_location_coordinates(self, session):
        """Coordinates never hit the geocoder."""
        coordinates = Coordinates(39.0, -86.0)

        assert resolve_location(coordinates, Geocoder(session=session)) is coordinates
        session.get.assert_not_called()
