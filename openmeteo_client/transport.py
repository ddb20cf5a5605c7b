"""Single-request HTTP transport shared by the weather client and the geocoder.

One GET per call, no retries and no caching. Failures are mapped onto the
package's error types: requests exceptions become NetworkError, non-success
statuses TransportError, and undecodable bodies MalformedResponseError.
"""

import logging
from typing import Any, Dict

import requests

from openmeteo_client.errors import MalformedResponseError, NetworkError, TransportError


def _error_reason(response: requests.Response) -> str | None:
    # OpenMeteo reports errors as {"error": true, "reason": "..."}
    try:
        body = response.json()
    except ValueError:
        return None

    if isinstance(body, dict) and body.get("reason") is not None:
        return str(body["reason"])

    return None


def get_json(
    session: requests.Session,
    url: str,
    params: Dict[str, Any],
    logger: logging.Logger,
) -> Any:
    """Perform exactly one GET request and return the decoded JSON body.

    Args:
        session (requests.Session): Session used to issue the request.
        url (str): Base URL of the endpoint.
        params (Dict[str, Any]): Query parameters, serialised by requests.
        logger (logging.Logger): Logger of the calling component.

    Returns:
        Any: The parsed JSON document.

    Raises:
        NetworkError: On connection-level failure.
        TransportError: When the API answers with a non-success status.
        MalformedResponseError: When a success response is not valid JSON.
    """
    try:
        response = session.get(url, params=params)
    except requests.RequestException as e:
        logger.error(f"Request to {url} failed before a response was received: {e}")
        raise NetworkError(f"Could not reach {url}: {e}") from e

    if not response.ok:
        reason = _error_reason(response)
        logger.error(f"Request to {url} returned status {response.status_code}: {reason or response.text}")
        raise TransportError(response.status_code, response.text, reason)

    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponseError(
            f"Expected a JSON document from {url}. Could not decode the response body: {e}",
            payload=response.text,
        ) from e
