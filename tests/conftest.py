"""Shared fixtures: mocked OpenMeteo payloads, responses and sessions."""

import json
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
import requests

from openmeteo_client import OpenMeteoClient


def build_payload(
    hourly=None,
    daily=None,
    hours=168,
    days=7,
    members=30,
    start=datetime(2024, 1, 1),
):
    """Build an ensemble-shaped OpenMeteo JSON payload.

    Every variable gets a control array plus `members` member arrays.
    """
    payload = {
        "latitude": 39.0,
        "longitude": -86.0,
        "generationtime_ms": 1.2,
        "utc_offset_seconds": -18000,
        "timezone": "America/Indiana/Indianapolis",
        "timezone_abbreviation": "EST",
        "elevation": 250.0,
    }

    if hourly:
        times = [(start + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M") for i in range(hours)]
        payload["hourly_units"] = {"time": "iso8601"}
        payload["hourly"] = {"time": times}
        for variable in hourly:
            payload["hourly_units"][variable] = "unit"
            payload["hourly"][variable] = [float(i) for i in range(hours)]
            for member in range(1, members + 1):
                payload["hourly_units"][f"{variable}_member{member:02d}"] = "unit"
                payload["hourly"][f"{variable}_member{member:02d}"] = [
                    float(i + member) for i in range(hours)
                ]

    if daily:
        dates = [(start + timedelta(days=i)).strftime("%Y-%m-%d") for i in range(days)]
        payload["daily_units"] = {"time": "iso8601"}
        payload["daily"] = {"time": dates}
        for variable in daily:
            payload["daily_units"][variable] = "unit"
            payload["daily"][variable] = [float(i) for i in range(days)]
            for member in range(1, members + 1):
                payload["daily"][f"{variable}_member{member:02d}"] = [
                    float(i * member) for i in range(days)
                ]

    return payload


def make_response(payload=None, status_code=200, text=None, url="https://example.test"):
    """Build a real requests.Response carrying a JSON payload or raw text."""
    response = requests.Response()
    response.status_code = status_code
    body = text if text is not None else json.dumps(payload)
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    response.url = url
    return response


@pytest.fixture
def session():
    """A requests.Session stand-in; set return_value or side_effect on .get."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    """An OpenMeteoClient bound to the mocked session."""
    return OpenMeteoClient(session=session)
