"""Public entry points, one per OpenMeteo API family.

Each function is a thin wrapper over OpenMeteoClient.query() with the
endpoint's EndpointConfig. Pass client= to reuse a session, an API key or
endpoint overrides across calls.

Example:\n
    # Temperature ensemble forecasts for Indianapolis in Fahrenheit, with GFS
    ensemble_models(
        "Indianapolis",
        hourly="apparent_temperature",
        response_units={"temperature_unit": "fahrenheit"},
        model="gfs_seamless",
    )
"""

from typing import Any, Mapping

import pandas as pd

from openmeteo_client.config import CLIMATE, ENSEMBLE, FORECAST, HISTORY, MARINE
from openmeteo_client.openmeteo_client import OpenMeteoClient


def _client(client: OpenMeteoClient | None) -> OpenMeteoClient:
    return client if client is not None else OpenMeteoClient()


def ensemble_models(
    location: Any,
    start: Any = None,
    end: Any = None,
    hourly: Any = None,
    daily: Any = None,
    response_units: Mapping[str, str] | None = None,
    model: str | None = None,
    timezone: str = "auto",
    client: OpenMeteoClient | None = None,
) -> pd.DataFrame:
    """Retrieve ensemble member forecasts from the OpenMeteo Ensemble API.

    Ensemble models return one array per forecast member, so every requested
    variable yields several columns: the control run ('hourly_<variable>')
    followed by 'hourly_<variable>_member01', '..._member02', and so on.
    Limited historical data is also available through this API.

    Example hourly variables: temperature_2m, precipitation, windspeed_10m,
    cloudcover, pressure_msl. Example models: icon_global, gfs05,
    gem_global, gfs_seamless. See https://open-meteo.com/en/docs/ensemble-api

    Args:
        location (Any): (latitude, longitude) pair or place name.
        start (Any): Start date "YYYY-MM-DD". Without dates the next 7 days
            are returned.
        end (Any): End date "YYYY-MM-DD".
        hourly (Any): Hourly variable or list of variables.
        daily (Any): Daily variable or list of variables.
        response_units (Mapping[str, str] | None): Unit preferences, e.g.
            {"temperature": "fahrenheit", "precipitation": "inch"}.
        model (str | None): Ensemble model to query.
        timezone (str): Timezone for timestamps. "auto" uses the timezone
            local to location.
        client (OpenMeteoClient | None): Client to use instead of a new one.

    Returns:
        pd.DataFrame: One row per timestamp, one column per (variable, member).

    Raises:
        ValidationError: No hourly or daily variable, or a malformed date.
        TransportError: The API returned a non-success status.
        NetworkError: The API could not be reached.
        MalformedResponseError: Response arrays do not align.
    """
    return _client(client).query(
        ENSEMBLE,
        location,
        start=start,
        end=end,
        hourly=hourly,
        daily=daily,
        response_units=response_units,
        model=model,
        timezone=timezone,
        downscaling=None,  # no downscaling option on this endpoint
    )


def weather_forecast(
    location: Any,
    start: Any = None,
    end: Any = None,
    hourly: Any = None,
    daily: Any = None,
    response_units: Mapping[str, str] | None = None,
    model: str | None = None,
    timezone: str = "auto",
    client: OpenMeteoClient | None = None,
) -> pd.DataFrame:
    """Retrieve deterministic weather forecasts from the OpenMeteo Forecast API."""
    return _client(client).query(
        FORECAST,
        location,
        start=start,
        end=end,
        hourly=hourly,
        daily=daily,
        response_units=response_units,
        model=model,
        timezone=timezone,
        downscaling=None,
    )


def weather_history(
    location: Any,
    start: Any,
    end: Any,
    hourly: Any = None,
    daily: Any = None,
    response_units: Mapping[str, str] | None = None,
    model: str | None = None,
    timezone: str = "auto",
    client: OpenMeteoClient | None = None,
) -> pd.DataFrame:
    """Retrieve historical observations from the OpenMeteo Archive API.

    start and end are required. The archive lags real time by a few days.
    """
    return _client(client).query(
        HISTORY,
        location,
        start=start,
        end=end,
        hourly=hourly,
        daily=daily,
        response_units=response_units,
        model=model,
        timezone=timezone,
        downscaling=None,
    )


def climate_forecast(
    location: Any,
    start: Any,
    end: Any,
    daily: Any = None,
    response_units: Mapping[str, str] | None = None,
    model: str | None = None,
    downscaling: bool = True,
    client: OpenMeteoClient | None = None,
) -> pd.DataFrame:
    """Retrieve daily climate model projections from the OpenMeteo Climate API.

    Args:
        location (Any): (latitude, longitude) pair or place name.
        start (Any): Start date "YYYY-MM-DD".
        end (Any): End date "YYYY-MM-DD".
        daily (Any): Daily variable or list of variables.
        response_units (Mapping[str, str] | None): Unit preferences.
        model (str | None): Climate model, e.g. "EC_Earth3P_HR".
        downscaling (bool): Apply statistical downscaling and bias
            correction. Sent as disable_bias_correction=<not downscaling>.
        client (OpenMeteoClient | None): Client to use instead of a new one.
    """
    return _client(client).query(
        CLIMATE,
        location,
        start=start,
        end=end,
        daily=daily,
        response_units=response_units,
        model=model,
        timezone=None,
        downscaling=downscaling,
    )


def marine_forecast(
    location: Any,
    start: Any = None,
    end: Any = None,
    hourly: Any = None,
    daily: Any = None,
    response_units: Mapping[str, str] | None = None,
    timezone: str = "auto",
    client: OpenMeteoClient | None = None,
) -> pd.DataFrame:
    """Retrieve marine forecasts (waves, swell) from the OpenMeteo Marine API.

    Wave heights default to meters; pass {"length": "imperial"} for feet.
    """
    return _client(client).query(
        MARINE,
        location,
        start=start,
        end=end,
        hourly=hourly,
        daily=daily,
        response_units=response_units,
        timezone=timezone,
        downscaling=None,
    )
