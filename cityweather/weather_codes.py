# ABOUTME: Lookup table from Open-Meteo WMO weather codes to readable phrases.
# ABOUTME: Unknown codes fall back to a label that shows the raw number.

from types import MappingProxyType

WEATHER_CODES = MappingProxyType(
    {
        0: "Clear sky",
        1: "Mainly clear",
        2: "Partly cloudy",
        3: "Overcast",
        45: "Fog",
        48: "Rime fog",
        51: "Light drizzle",
        53: "Moderate drizzle",
        55: "Dense drizzle",
        61: "Slight rain",
        63: "Moderate rain",
        65: "Heavy rain",
        71: "Slight snowfall",
        73: "Moderate snowfall",
        75: "Heavy snowfall",
        80: "Rain showers (slight)",
        81: "Rain showers (moderate)",
        82: "Rain showers (violent)",
        95: "Thunderstorm",
    }
)


def weather_code_to_text(code: int) -> str:
    """Translate a weather code to text, e.g. 3 -> "Overcast".

    Codes missing from the table come back as "Weather code: <code>".
    """
    return WEATHER_CODES.get(code, f"Weather code: {code}")
