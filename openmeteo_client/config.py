"""Endpoint definitions and client configuration for the OpenMeteo APIs.

Endpoint families:

- ensemble: https://ensemble-api.open-meteo.com/v1/ensemble
- forecast: https://api.open-meteo.com/v1/forecast
- history:  https://archive-api.open-meteo.com/v1/archive
- climate:  https://climate-api.open-meteo.com/v1/climate
- marine:   https://marine-api.open-meteo.com/v1/marine

All families share one query builder and one response flattener. What differs
between them is captured by an EndpointConfig: the base URL, which temporal
resolutions the endpoint serves, whether it accepts the downscaling flag and
whether a date range is mandatory.

Client configuration is either loaded from a JSON file or passed as kwargs:\n
    config = OpenMeteoClientConfig(
        create_from_file=True,
        config_file="/path/to/openmeteo.json",
        kwargs={"api_key": "..."},
    )

    config = OpenMeteoClientConfig(
        kwargs={"endpoints": {"forecast": "http://localhost:8080/v1/forecast"}}
    )
"""

import json
from dataclasses import InitVar, dataclass, field
from typing import Any, Dict, Tuple
from urllib.parse import urlsplit, urlunsplit

HOURLY = "hourly"
DAILY = "daily"


@dataclass(frozen=True)
class EndpointConfig:
    """Static description of one OpenMeteo API family.

    Attributes:
        name (str): Short endpoint identifier, used for config overrides and logs.
        base_url (str): Fixed REST endpoint queried with GET.
        resolutions (Tuple[str, ...]): Variable keys the endpoint accepts,
            a subset of ("hourly", "daily").
        supports_downscaling (bool): Whether the endpoint accepts the
            disable_bias_correction flag.
        requires_dates (bool): Whether start and end must both be supplied.
    """

    name: str
    base_url: str
    resolutions: Tuple[str, ...] = (HOURLY, DAILY)
    supports_downscaling: bool = False
    requires_dates: bool = False

    def customer_url(self) -> str:
        """Return the base URL on the commercial customer- host."""
        parts = urlsplit(self.base_url)
        return urlunsplit(parts._replace(netloc=f"customer-{parts.netloc}"))


ENSEMBLE = EndpointConfig(
    name="ensemble",
    base_url="https://ensemble-api.open-meteo.com/v1/ensemble",
)

FORECAST = EndpointConfig(
    name="forecast",
    base_url="https://api.open-meteo.com/v1/forecast",
)

HISTORY = EndpointConfig(
    name="history",
    base_url="https://archive-api.open-meteo.com/v1/archive",
    requires_dates=True,
)

CLIMATE = EndpointConfig(
    name="climate",
    base_url="https://climate-api.open-meteo.com/v1/climate",
    resolutions=(DAILY,),
    supports_downscaling=True,
    requires_dates=True,
)

MARINE = EndpointConfig(
    name="marine",
    base_url="https://marine-api.open-meteo.com/v1/marine",
)

ENDPOINTS: Dict[str, EndpointConfig] = {
    endpoint.name: endpoint
    for endpoint in (ENSEMBLE, FORECAST, HISTORY, CLIMATE, MARINE)
}

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"


@dataclass
class OpenMeteoClientConfig:
    """Configuration for OpenMeteoClient.

    Supports the same two sources as the rest of the service: a JSON file with
    optional kwargs overrides, or kwargs only. With neither, the public
    endpoints are used without an API key.

    Attributes:
        api_key (str | None): Commercial API key. When set it is sent as the
            apikey query parameter and default endpoints move to the
            customer- host.
        endpoints (Dict[str, str]): Base URL overrides keyed by endpoint name,
            e.g. for a self-hosted OpenMeteo instance.

    Configuration File Schema:
        {
            "api_key": "..." | null,
            "endpoints": {"ensemble": "https://...", ...}
        }
    """

    api_key: str | None = field(init=False, default=None)
    endpoints: Dict[str, str] = field(init=False, default_factory=dict)
    create_from_file: InitVar[bool] = field(default=False)
    config_file: InitVar[str | None] = field(default=None)
    kwargs: InitVar[Dict[str, Any] | None] = field(default=None)

    def __post_init__(
        self,
        create_from_file: bool,
        config_file: str | None,
        kwargs: Dict[str, Any] | None,
    ):
        """Populate the configuration from a file and/or kwargs.

        Args:
            create_from_file (bool): Load the base configuration from config_file.
            config_file (str | None): Path to a JSON configuration file.
                Required when create_from_file=True.
            kwargs (Dict[str, Any] | None): Direct values, or overrides on top
                of the file configuration.

        Raises:
            ValueError: When create_from_file=True but no config_file is given.
            ValueError: When a parameter has the wrong type or names an
                unknown endpoint.
        """
        if create_from_file:
            if not config_file:
                raise ValueError(
                    "Parameter config_file is required when create_from_file=True."
                )

            config = self.__get_config(config_file)

            self.__set_api_key(config.get("api_key"))
            self.__set_endpoints(config.get("endpoints"))

        if kwargs:
            if "api_key" in kwargs:
                self.__set_api_key(kwargs.get("api_key"))
            if "endpoints" in kwargs:
                self.__set_endpoints(kwargs.get("endpoints"))

    def __get_config(self, config_file: str) -> Dict[str, Any]:
        with open(file=config_file, mode="r") as file:
            config = json.load(fp=file)

        return config

    def __set_api_key(self, api_key: Any) -> None:
        if api_key is None or isinstance(api_key, str):
            self.api_key = api_key or None
        else:
            raise ValueError(
                f"Parameter api_key must be {str} or None. Received {type(api_key)} instead."
            )

    def __set_endpoints(self, endpoints: Any) -> None:
        if endpoints is None:
            self.endpoints = {}
            return

        if not isinstance(endpoints, dict):
            raise ValueError(
                f"Parameter endpoints must be {Dict[str, str]}. Received {type(endpoints)} instead."
            )

        for name, url in endpoints.items():
            if name not in ENDPOINTS:
                raise ValueError(
                    f"Unknown endpoint {name!r} in endpoints. Expected one of {sorted(ENDPOINTS)}."
                )
            if not isinstance(url, str):
                raise ValueError(
                    f"Endpoint URL for {name!r} must be {str}. Received {type(url)} instead."
                )

        self.endpoints = dict(endpoints)

    def url_for(self, endpoint: EndpointConfig) -> str:
        """Return the base URL to query for the given endpoint.

        Explicit overrides win; otherwise the customer- host is used when an
        API key is configured, and the public URL when it is not.
        """
        if endpoint.name in self.endpoints:
            return self.endpoints[endpoint.name]
        if self.api_key:
            return endpoint.customer_url()
        return endpoint.base_url
