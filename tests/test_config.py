"""Tests for OpenMeteoClientConfig and endpoint URL selection."""

import json

import pytest

from openmeteo_client import ENSEMBLE, FORECAST, OpenMeteoClientConfig


class TestOpenMeteoClientConfig:
    """Configuration from kwargs and from JSON files."""

    def test_defaults(self):
        """Without sources the public endpoints are used without a key."""
        config = OpenMeteoClientConfig()

        assert config.api_key is None
        assert config.endpoints == {}
        assert config.url_for(ENSEMBLE) == "https://ensemble-api.open-meteo.com/v1/ensemble"

    def test_api_key_customer_host(self):
        """An API key switches default endpoints to the customer- host."""
        config = OpenMeteoClientConfig(kwargs={"api_key": "secret"})

        assert config.url_for(ENSEMBLE) == "https://customer-ensemble-api.open-meteo.com/v1/ensemble"
        assert config.url_for(FORECAST) == "https://customer-api.open-meteo.com/v1/forecast"

    def test_endpoint_override(self):
        """Overrides win over public and customer URLs."""
        config = OpenMeteoClientConfig(
            kwargs={"api_key": "secret", "endpoints": {"ensemble": "http://localhost:8080/v1/ensemble"}}
        )

        assert config.url_for(ENSEMBLE) == "http://localhost:8080/v1/ensemble"
        assert config.url_for(FORECAST) == "https://customer-api.open-meteo.com/v1/forecast"

    def test_from_file_with_override(self, tmp_path):
        """File values are loaded and kwargs override them."""
        config_file = tmp_path / "openmeteo.json"
        config_file.write_text(
            json.dumps({"api_key": "from-file", "endpoints": {"forecast": "http://meteo.local/v1/forecast"}})
        )

        config = OpenMeteoClientConfig(
            create_from_file=True, config_file=str(config_file), kwargs={"api_key": "from-kwargs"}
        )

        assert config.api_key == "from-kwargs"
        assert config.url_for(FORECAST) == "http://meteo.local/v1/forecast"

    def test_file_required(self):
        """create_from_file without a path fails."""
        with pytest.raises(ValueError, match="config_file is required"):
            OpenMeteoClientConfig(create_from_file=True)

    def test_bad_api_key(self):
        """A non-string key is rejected."""
        with pytest.raises(ValueError, match="api_key"):
            OpenMeteoClientConfig(kwargs={"api_key": 1234})

    def test_unknown_endpoint(self):
        """Overrides must name a known endpoint."""
        with pytest.raises(ValueError, match="Unknown endpoint 'seasonal'"):
            OpenMeteoClientConfig(kwargs={"endpoints": {"seasonal": "http://x"}})

    def test_bad_endpoint_url(self):
        """Override URLs must be strings."""
        with pytest.raises(ValueError, match="Endpoint URL for 'ensemble'"):
            OpenMeteoClientConfig(kwargs={"endpoints": {"ensemble": None}})
