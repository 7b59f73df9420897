# ABOUTME: Exception types raised by the location resolver and weather fetcher.
# ABOUTME: Separates local validation failures from upstream transport failures.


class CityWeatherError(Exception):
    """Base class for errors raised by this package."""


class EmptyQueryError(CityWeatherError, ValueError):
    """The search text was empty after trimming whitespace."""

    def __init__(self) -> None:
        super().__init__("Search query must not be empty")


class ResolveFailure(CityWeatherError):
    """The geocoding request failed (bad status, network error, or bad payload)."""


class FetchFailure(CityWeatherError):
    """The forecast request failed (bad status, network error, or bad payload)."""
