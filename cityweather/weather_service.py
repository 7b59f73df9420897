# ABOUTME: Service layer for Open-Meteo API calls and response parsing.
# ABOUTME: Resolves city names to candidate locations and fetches current conditions.

import logging

import httpx

from cityweather.errors import EmptyQueryError, FetchFailure, ResolveFailure
from cityweather.models import LocationCandidate, WeatherResponse

logger = logging.getLogger(__name__)

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

MAX_CANDIDATES = 5

CURRENT_PARAMS = ",".join(
    [
        "temperature_2m",
        "relative_humidity_2m",
        "apparent_temperature",
        "weather_code",
        "wind_speed_10m",
        "is_day",
    ]
)


async def search_locations(client: httpx.AsyncClient, name: str) -> list[LocationCandidate]:
    """Look up places matching a city name using the Open-Meteo geocoding API.

    Returns up to five candidates in the order the API ranks them. An empty
    list means nothing matched; it is not an error.
    """
    query = name.strip()
    if not query:
        raise EmptyQueryError()

    logger.debug("Geocoding %r", query)
    try:
        resp = await client.get(
            GEOCODING_URL,
            params={"name": query, "count": MAX_CANDIDATES, "language": "en", "format": "json"},
        )
        resp.raise_for_status()
        data = resp.json()
        results = data.get("results") or []
        return [parse_candidate(r) for r in results[:MAX_CANDIDATES]]
    except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
        raise ResolveFailure(f"Geocoding failed for {query!r}: {e}") from e


async def get_current_weather(client: httpx.AsyncClient, latitude: float, longitude: float) -> WeatherResponse:
    """Fetch current conditions for a coordinate pair from the Open-Meteo forecast API."""
    logger.debug("Fetching current weather for %s,%s", latitude, longitude)
    try:
        resp = await client.get(
            FORECAST_URL,
            params={
                "latitude": latitude,
                "longitude": longitude,
                "current": CURRENT_PARAMS,
                "temperature_unit": "celsius",
                "wind_speed_unit": "kmh",
                "timezone": "auto",
            },
        )
        resp.raise_for_status()
        return WeatherResponse.model_validate(resp.json())
    except (httpx.HTTPError, ValueError) as e:
        raise FetchFailure(f"Weather fetch failed for {latitude},{longitude}: {e}") from e


def parse_candidate(raw: dict) -> LocationCandidate:
    """Convert one geocoding result into a LocationCandidate."""
    country = raw.get("country") or ""
    return LocationCandidate(
        id=f"{raw['latitude']},{raw['longitude']},{raw['name']},{country}",
        name=raw["name"],
        country=country,
        admin1=raw.get("admin1") or "",
        latitude=raw["latitude"],
        longitude=raw["longitude"],
        timezone=raw.get("timezone") or "",
    )
