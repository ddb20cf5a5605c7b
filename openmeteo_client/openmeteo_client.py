"""OpenMeteo API Client for Tidy Weather Tables

This module holds the logic shared by every OpenMeteo endpoint family
(ensemble, forecast, history, climate, marine). A single OpenMeteoClient is
parametrised by an EndpointConfig instead of one client class per API family.

Request Pipeline:
1. validate_request(): variables present, dates well formed. Pure, no I/O.
2. Location resolution: place names are geocoded to coordinates.
3. build_query(): flat, ordered query parameters for the endpoint's base URL.
4. get_data(): exactly one blocking GET, JSON body or an error.
5. process_response(): time-series arrays flattened into a pandas DataFrame.

Output Structure:
- 'datetime' column for hourly data, 'date' column for daily data
- One column per requested (variable, member) pair, named
  '<resolution>_<api key>', e.g. 'hourly_temperature_2m_member04'
- Null values kept as NaN (numeric) or None (other), rows are never dropped
- Response metadata (coordinates, elevation, timezone, units) in DataFrame.attrs

Error Handling:
- ValidationError: raised before any request is issued
- TransportError / NetworkError: raised by the single request, never retried
- MalformedResponseError: response arrays misaligned or missing

Usage:\n
    client = OpenMeteoClient()
    data = client.query(
        ENSEMBLE,
        location=(39, -86),
        hourly=["temperature_2m", "precipitation"],
        model="gfs_seamless",
    )
"""

import logging
import re
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import numpy as np
import pandas as pd
import requests

from openmeteo_client.config import DAILY, HOURLY, EndpointConfig, OpenMeteoClientConfig
from openmeteo_client.errors import MalformedResponseError, ValidationError
from openmeteo_client.location import Coordinates, Geocoder, resolve_location, to_location
from openmeteo_client.transport import get_json

TIME_COLUMNS = {HOURLY: "datetime", DAILY: "date"}
TIME_FORMATS = {HOURLY: "%Y-%m-%dT%H:%M", DAILY: "%Y-%m-%d"}
ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _normalize_variables(name: str, variables: Any) -> List[str]:
    if variables is None:
        return []
    if isinstance(variables, str):
        variables = [variables]
    if not isinstance(variables, (list, tuple)) or not all(isinstance(v, str) for v in variables):
        raise ValidationError(
            f"Parameter {name} must be a variable name or a list of variable names. Received {variables!r} instead."
        )

    # Repeated names would collapse into the same column.
    return list(dict.fromkeys(v for v in variables if v))


def _normalize_date(name: str, value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    # strptime alone would accept "2024-1-1"
    if isinstance(value, str) and ISO_DATE.fullmatch(value):
        try:
            return datetime.strptime(value, "%Y-%m-%d").date().isoformat()
        except ValueError:
            pass

    raise ValidationError(
        f"Invalid date format for {name}: {value!r}. Expected an ISO 8601 calendar date (YYYY-MM-DD)."
    )


def _check_downscaling(endpoint: EndpointConfig, downscaling: bool | None) -> None:
    if downscaling is not None and not endpoint.supports_downscaling:
        raise ValidationError(
            f"The {endpoint.name} endpoint does not support the downscaling option."
        )


def validate_request(
    endpoint: EndpointConfig,
    hourly: Any = None,
    daily: Any = None,
    start: Any = None,
    end: Any = None,
    downscaling: bool | None = None,
) -> Tuple[List[str], List[str], str | None, str | None]:
    """Validate caller arguments before anything touches the network.

    Args:
        endpoint (EndpointConfig): Endpoint the request is meant for.
        hourly (Any): Hourly variable name or list of names.
        daily (Any): Daily variable name or list of names.
        start (Any): Start date, "YYYY-MM-DD" string or date object.
        end (Any): End date, "YYYY-MM-DD" string or date object.
        downscaling (bool | None): Downscaling flag; only None is accepted by
            endpoints without downscaling support.

    Returns:
        Tuple[List[str], List[str], str | None, str | None]: Normalised hourly
            and daily variable lists and ISO formatted start and end dates.

    Raises:
        ValidationError: When no variables were supplied, a variable list
            targets a resolution the endpoint does not serve, downscaling is
            set for an endpoint without support for it, required dates are
            missing, or a date is not a valid calendar date.
    """
    hourly = _normalize_variables(HOURLY, hourly)
    daily = _normalize_variables(DAILY, daily)

    if not hourly and not daily:
        raise ValidationError(
            "No measurement variables supplied: an hourly or daily measure is required."
        )

    for resolution, variables in ((HOURLY, hourly), (DAILY, daily)):
        if variables and resolution not in endpoint.resolutions:
            raise ValidationError(
                f"The {endpoint.name} endpoint does not serve {resolution} variables. Supported: {list(endpoint.resolutions)}."
            )

    _check_downscaling(endpoint, downscaling)

    if endpoint.requires_dates and (start is None or end is None):
        raise ValidationError(
            f"Parameters start and end are required by the {endpoint.name} endpoint."
        )

    return hourly, daily, _normalize_date("start", start), _normalize_date("end", end)


def _unit_key(category: str) -> str:
    category = str(category)
    return category if category.endswith("_unit") else f"{category}_unit"


def _member_keys(section: Mapping[str, Any], variable: str) -> List[str]:
    # Deterministic models return "<variable>", ensembles add "<variable>_memberNN".
    pattern = re.compile(rf"^{re.escape(variable)}(_member\d+)?$")
    return [key for key in section if pattern.match(key)]


def _to_column(values: Sequence[Any]) -> pd.Series:
    numeric = all(
        value is None or (isinstance(value, (int, float)) and not isinstance(value, bool))
        for value in values
    )
    if numeric:
        return pd.Series(
            np.array([np.nan if value is None else value for value in values], dtype=float)
        )

    # Explicit object dtype keeps None, string inference would turn it into NaN.
    return pd.Series(values, dtype=object)


class OpenMeteoClient:
    """Client for the OpenMeteo weather APIs, shared by all endpoint families.

    The client holds a requests session, a geocoder for place names and an
    OpenMeteoClientConfig. Each query() call is otherwise stateless: validate,
    resolve, build, fetch once, flatten.

    Attributes:
        config (OpenMeteoClientConfig): API key and endpoint URL overrides.
        session (requests.Session): Session used for weather requests.
        geocoder (Geocoder): Resolver for place-name locations.
        logger: Logger named after the class.

    Example:
        client = OpenMeteoClient(OpenMeteoClientConfig(kwargs={"api_key": "..."}))
        data = client.query(FORECAST, "Berlin", daily="temperature_2m_max")
    """

    def __init__(
        self,
        config: OpenMeteoClientConfig | None = None,
        session: requests.Session | None = None,
        geocoder: Geocoder | None = None,
    ):
        self.config = config if config is not None else OpenMeteoClientConfig()
        self.session = session if session is not None else requests.Session()
        self.geocoder = geocoder if geocoder is not None else Geocoder(session=self.session)

        self.logger = logging.getLogger(name=self.__class__.__name__)

        self.logger.info(f"Setting up {self.__class__.__name__}")

    def build_query(
        self,
        endpoint: EndpointConfig,
        coordinates: Coordinates,
        start: str | None = None,
        end: str | None = None,
        hourly: Sequence[str] = (),
        daily: Sequence[str] = (),
        response_units: Mapping[str, str] | None = None,
        model: str | None = None,
        timezone: str | None = "auto",
        downscaling: bool | None = None,
    ) -> Dict[str, Any]:
        """Assemble the ordered query parameters for one request.

        Absent optional values are omitted rather than sent as placeholders.
        downscaling=None is the disabled value every endpoint accepts; a
        boolean is only valid for endpoints that support downscaling and is
        sent as disable_bias_correction=<not downscaling>.

        Args:
            endpoint (EndpointConfig): Target endpoint.
            coordinates (Coordinates): Resolved location.
            start (str | None): ISO start date.
            end (str | None): ISO end date.
            hourly (Sequence[str]): Hourly variables, comma-joined.
            daily (Sequence[str]): Daily variables, comma-joined.
            response_units (Mapping[str, str] | None): Unit category to unit
                name, e.g. {"temperature": "fahrenheit"}.
            model (str | None): Model identifier, sent as "models".
            timezone (str | None): Timezone for returned timestamps.
            downscaling (bool | None): Downscaling flag, see above.

        Returns:
            Dict[str, Any]: Query parameters in a fixed order.

        Raises:
            ValidationError: When downscaling is set for an endpoint that does
                not support it.
        """
        _check_downscaling(endpoint, downscaling)

        params: Dict[str, Any] = {
            "latitude": coordinates.latitude,
            "longitude": coordinates.longitude,
        }

        if start is not None:
            params["start_date"] = start
        if end is not None:
            params["end_date"] = end
        if hourly:
            params["hourly"] = ",".join(hourly)
        if daily:
            params["daily"] = ",".join(daily)
        if model is not None:
            params["models"] = model
        if timezone is not None:
            params["timezone"] = timezone
        if downscaling is not None:
            params["disable_bias_correction"] = "false" if downscaling else "true"

        for category, unit in (response_units or {}).items():
            if unit is not None:
                params[_unit_key(category)] = unit

        if self.config.api_key:
            params["apikey"] = self.config.api_key

        return params

    def build_url(self, endpoint: EndpointConfig, params: Dict[str, Any]) -> str:
        """Return the full request URL for the given query parameters."""
        request = requests.Request("GET", self.config.url_for(endpoint), params=params)
        return request.prepare().url or ""

    def get_data(self, url: str, params: Dict[str, Any]) -> Any:
        """Issue the single GET request and return the parsed JSON body."""
        return get_json(self.session, url, params, self.logger)

    def __process_section(
        self, payload: Mapping[str, Any], resolution: str, variables: Sequence[str]
    ) -> pd.DataFrame:
        section = payload.get(resolution)

        if not isinstance(section, dict) or not isinstance(section.get("time"), list):
            raise MalformedResponseError(
                f"Response is missing the '{resolution}.time' index.", payload=payload
            )

        times = section["time"]

        try:
            index = pd.to_datetime(times, format=TIME_FORMATS[resolution])
        except (ValueError, TypeError) as e:
            raise MalformedResponseError(
                f"Could not parse the '{resolution}.time' index: {e}", payload=payload
            ) from e

        for key, values in section.items():
            if isinstance(values, list) and len(values) != len(times):
                raise MalformedResponseError(
                    f"Array '{resolution}.{key}' does not align with the time index. Expected length {len(times)} Got: {len(values)} instead.",
                    payload=payload,
                )

        data: Dict[str, Any] = {TIME_COLUMNS[resolution]: index}

        for variable in variables:
            keys = _member_keys(section, variable)
            if not keys:
                raise MalformedResponseError(
                    f"Requested {resolution} variable {variable!r} is missing from the response.",
                    payload=payload,
                )

            for key in keys:
                values = section[key]
                if not isinstance(values, list) or len(values) != len(times):
                    length = len(values) if isinstance(values, list) else type(values)
                    raise MalformedResponseError(
                        f"Array '{resolution}.{key}' does not align with the time index. Expected length {len(times)} Got: {length} instead.",
                        payload=payload,
                    )
                data[f"{resolution}_{key}"] = _to_column(values)

        return pd.DataFrame(data)

    def process_response(
        self,
        payload: Any,
        hourly: Sequence[str] = (),
        daily: Sequence[str] = (),
    ) -> pd.DataFrame:
        """Flatten an OpenMeteo JSON payload into a row-per-timestamp table.

        Args:
            payload (Any): Parsed JSON body.
            hourly (Sequence[str]): Hourly variables in request order.
            daily (Sequence[str]): Daily variables in request order.

        Returns:
            pd.DataFrame: One row per timestamp. Hourly-only tables start with
                'datetime', daily-only tables with 'date'. When both were
                requested the tables are outer joined on the calendar date,
                giving 'date', 'datetime', hourly columns, daily columns.

        Raises:
            MalformedResponseError: When the payload is not an object, a time
                index or requested variable is missing, or an array length
                differs from its time index.
        """
        if not isinstance(payload, dict):
            raise MalformedResponseError(
                f"Expected a JSON object. Got: {type(payload)} instead.", payload=payload
            )

        frames = {}
        if hourly:
            frames[HOURLY] = self.__process_section(payload, HOURLY, hourly)
        if daily:
            frames[DAILY] = self.__process_section(payload, DAILY, daily)

        if HOURLY in frames and DAILY in frames:
            hourly_frame = frames[HOURLY]
            hourly_frame.insert(0, "date", hourly_frame["datetime"].dt.normalize())
            data = hourly_frame.merge(frames[DAILY], on="date", how="outer")
        elif HOURLY in frames:
            data = frames[HOURLY]
        else:
            data = frames[DAILY]

        units = {}
        for resolution in frames:
            for key, unit in (payload.get(f"{resolution}_units") or {}).items():
                if f"{resolution}_{key}" in data.columns:
                    units[f"{resolution}_{key}"] = unit

        data.attrs = {
            "latitude": payload.get("latitude"),
            "longitude": payload.get("longitude"),
            "elevation": payload.get("elevation"),
            "timezone": payload.get("timezone"),
            "utc_offset_seconds": payload.get("utc_offset_seconds"),
            "units": units,
        }

        return data

    def query(
        self,
        endpoint: EndpointConfig,
        location: Any,
        start: Any = None,
        end: Any = None,
        hourly: Any = None,
        daily: Any = None,
        response_units: Mapping[str, str] | None = None,
        model: str | None = None,
        timezone: str | None = "auto",
        downscaling: bool | None = None,
    ) -> pd.DataFrame:
        """Run the full pipeline against one endpoint and return a table.

        Validation happens first, so an invalid call never geocodes or
        requests anything.

        Args:
            endpoint (EndpointConfig): Target endpoint.
            location (Any): (latitude, longitude) pair, place name,
                Coordinates or PlaceName.
            start (Any): Optional start date.
            end (Any): Optional end date.
            hourly (Any): Hourly variable(s).
            daily (Any): Daily variable(s).
            response_units (Mapping[str, str] | None): Unit preferences.
            model (str | None): Model identifier.
            timezone (str | None): Timezone for timestamps, "auto" by default.
            downscaling (bool | None): Downscaling flag, None when disabled.

        Returns:
            pd.DataFrame: See process_response().
        """
        hourly, daily, start, end = validate_request(
            endpoint, hourly, daily, start, end, downscaling=downscaling
        )
        coordinates = resolve_location(to_location(location), self.geocoder)

        params = self.build_query(
            endpoint,
            coordinates,
            start=start,
            end=end,
            hourly=hourly,
            daily=daily,
            response_units=response_units,
            model=model,
            timezone=timezone,
            downscaling=downscaling,
        )
        url = self.config.url_for(endpoint)

        self.logger.info(
            f"Retrieving {endpoint.name} data for Lat.: {coordinates.latitude}° (N), Lon.: {coordinates.longitude}° (E)"
        )
        logged_params = {**params, "apikey": "***"} if "apikey" in params else params
        self.logger.debug(f"Request URL: {self.build_url(endpoint, logged_params)}")

        payload = self.get_data(url, params)
        data = self.process_response(payload, hourly=hourly, daily=daily)

        self.logger.info(
            f"{self.__class__.__name__} retrieved {data.shape[0]} rows x {data.shape[1]} columns from {endpoint.name}."
        )

        return data
