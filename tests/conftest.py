# ABOUTME: Shared test fixtures for the city weather test suite.
# ABOUTME: Provides Open-Meteo payloads and mock HTTP client builders so no test touches the network.

from unittest.mock import AsyncMock

import httpx
import pytest

CHENNAI_RESULT = {
    "id": 1264527,
    "name": "Chennai",
    "latitude": 13.08784,
    "longitude": 80.27847,
    "country": "India",
    "admin1": "Tamil Nadu",
    "timezone": "Asia/Kolkata",
}

CHENNAI_US_RESULT = {
    "name": "Chennai",
    "latitude": 40.1,
    "longitude": -75.2,
    "country": "United States",
}

FORECAST_PAYLOAD = {
    "latitude": 13.125,
    "longitude": 80.25,
    "generationtime_ms": 0.05,
    "utc_offset_seconds": 19800,
    "timezone": "Asia/Kolkata",
    "timezone_abbreviation": "GMT+5:30",
    "elevation": 6.0,
    "current_units": {"temperature_2m": "°C", "wind_speed_10m": "km/h"},
    "current": {
        "time": "2025-01-15T12:00",
        "interval": 900,
        "temperature_2m": 31.5,
        "relative_humidity_2m": 62,
        "apparent_temperature": 35.2,
        "weather_code": 3,
        "wind_speed_10m": 14.4,
        "is_day": 1,
    },
}


def make_response(json_data: dict, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))


def make_client(*responses) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient whose get() returns (or raises) the given items in order."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    mock.get.side_effect = list(responses)
    return mock


@pytest.fixture
def geocode_response() -> httpx.Response:
    return make_response({"results": [CHENNAI_RESULT, CHENNAI_US_RESULT]})


@pytest.fixture
def forecast_response() -> httpx.Response:
    return make_response(FORECAST_PAYLOAD)


def make_raw_response(body: str, status_code: int = 200) -> httpx.Response:
    """Build a JSON response from literal text, for payloads json.dumps refuses to write (NaN, Infinity)."""
    return httpx.Response(
        status_code=status_code,
        content=body.encode(),
        headers={"content-type": "application/json"},
        request=httpx.Request("GET", "https://test"),
    )
