from openmeteo_client.config import (
    CLIMATE,
    ENDPOINTS,
    ENSEMBLE,
    FORECAST,
    HISTORY,
    MARINE,
    EndpointConfig,
    OpenMeteoClientConfig,
)
from openmeteo_client.endpoints import (
    climate_forecast,
    ensemble_models,
    marine_forecast,
    weather_forecast,
    weather_history,
)
from openmeteo_client.errors import (
    LocationNotFoundError,
    MalformedResponseError,
    NetworkError,
    OpenMeteoError,
    TransportError,
    ValidationError,
)
from openmeteo_client.location import Coordinates, Geocoder, PlaceName
from openmeteo_client.openmeteo_client import OpenMeteoClient, validate_request

__all__ = [
    "CLIMATE",
    "ENDPOINTS",
    "ENSEMBLE",
    "FORECAST",
    "HISTORY",
    "MARINE",
    "Coordinates",
    "EndpointConfig",
    "Geocoder",
    "LocationNotFoundError",
    "MalformedResponseError",
    "NetworkError",
    "OpenMeteoClient",
    "OpenMeteoClientConfig",
    "OpenMeteoError",
    "PlaceName",
    "TransportError",
    "ValidationError",
    "climate_forecast",
    "ensemble_models",
    "marine_forecast",
    "validate_request",
    "weather_forecast",
    "weather_history",
]
