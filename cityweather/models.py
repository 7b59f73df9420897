# ABOUTME: Pydantic BaseModels for geocoding candidates and current weather responses.
# ABOUTME: Defines structured types for Open-Meteo API data used throughout the app.

from pydantic import BaseModel, ConfigDict


class LocationCandidate(BaseModel):
    """One geocoding match the user can pick."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str
    name: str
    country: str
    admin1: str = ""
    latitude: float
    longitude: float
    timezone: str = ""

    @property
    def label(self) -> str:
        """Place label like "Chennai, Tamil Nadu, India"."""
        parts = [self.name]
        if self.admin1:
            parts.append(self.admin1)
        parts.append(self.country)
        return ", ".join(parts)


class CurrentConditions(BaseModel):
    """The "current" block of an Open-Meteo forecast response.

    Provider metadata such as ``time`` and ``interval`` is kept as extra fields.
    """

    model_config = ConfigDict(frozen=True, extra="allow", allow_inf_nan=False)

    temperature_2m: float
    apparent_temperature: float
    relative_humidity_2m: float
    wind_speed_10m: float
    weather_code: int
    is_day: int

    @property
    def is_daytime(self) -> bool:
        return self.is_day == 1


class WeatherResponse(BaseModel):
    """Parsed response from the Open-Meteo forecast endpoint.

    Only ``current`` and ``timezone`` are used for display; every other field
    the provider sends passes through untouched.
    """

    model_config = ConfigDict(frozen=True, extra="allow", allow_inf_nan=False)

    latitude: float
    longitude: float
    timezone: str
    current: CurrentConditions | None = None
