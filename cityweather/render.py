# ABOUTME: HTML rendering of a SessionState: search form, messages, candidate list, weather card.
# ABOUTME: Pure string building with every user- and API-supplied value escaped.

import math
from html import escape

from cityweather.models import LocationCandidate, WeatherResponse
from cityweather.session import SessionState
from cityweather.weather_codes import weather_code_to_text

_STYLE = """
body { font-family: system-ui, sans-serif; background: #f1f5f9; margin: 0; }
main { max-width: 42rem; margin: 0 auto; padding: 1.5rem; }
.panel { background: #fff; border: 1px solid #e2e8f0; border-radius: 1rem; padding: 1.25rem; margin-top: 1.25rem; }
.row { display: flex; gap: .5rem; margin-top: 1rem; }
.row input { flex: 1; padding: .5rem 1rem; border: 1px solid #cbd5e1; border-radius: .75rem; }
button { padding: .5rem 1rem; border-radius: .75rem; border: 1px solid #e2e8f0; cursor: pointer; }
button.primary { background: #0f172a; color: #fff; font-weight: 600; }
.candidate { display: block; width: 100%; text-align: left; margin-top: .5rem; background: #fff; }
.status { color: #475569; }
.error { color: #dc2626; font-weight: 600; }
.muted { color: #64748b; font-size: .75rem; }
.temp { font-size: 2.25rem; font-weight: 800; margin: 0; }
.stats { display: grid; grid-template-columns: 1fr 1fr; gap: .75rem; margin-top: 1rem; }
.stats div { background: #f8fafc; border-radius: .75rem; padding: .75rem; }
footer { margin-top: 2rem; text-align: center; }
"""

# Disable the buttons once the form is submitted; deferred so the clicked button still posts its value.
_DISABLE_ON_SUBMIT = (
    "var f = this; setTimeout(function () { "
    "f.querySelectorAll('button').forEach(function (b) { b.disabled = true; }); }, 0)"
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (31.5 -> 32, -0.5 -> 0)."""
    return math.floor(value + 0.5)


def format_number(value: float) -> str:
    """Show 78.0 as "78" and 12.4 as "12.4"."""
    return f"{value:g}"


def render_page(state: SessionState) -> str:
    """Render the full HTML page for one session."""
    disabled = " disabled" if state.in_flight else ""
    parts = [
        "<!DOCTYPE html>",
        '<html lang="en"><head><meta charset="utf-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1">',
        f"<title>City Weather</title><style>{_STYLE}</style></head>",
        "<body><main>",
        '<header class="panel">',
        "<h1>City Weather</h1>",
        "<p>Type a city, choose a location, view the current weather (Open-Meteo, no API key).</p>",
        f'<form class="row" method="post" action="/search" onsubmit="{_DISABLE_ON_SUBMIT}">',
        f'<input name="query" placeholder="Example: Vijayawada" value="{escape(state.query)}" autofocus>',
        f'<button class="primary" type="submit"{disabled}>{"..." if state.in_flight else "Search"}</button>',
        "</form>",
        render_messages(state),
        "</header>",
    ]
    if state.candidates:
        parts.append(render_candidates(state.candidates, state.in_flight))
    if state.weather is not None and state.selected is not None:
        parts.append(render_weather_card(state.selected.label, state.weather))
    parts.append('<footer class="muted">Built with Starlette, httpx, and Open-Meteo.</footer>')
    parts.append("</main></body></html>")
    return "\n".join(parts)


def render_messages(state: SessionState) -> str:
    if not state.status and not state.error:
        return ""
    lines = []
    if state.status:
        lines.append(f'<p class="status">{escape(state.status)}</p>')
    if state.error:
        lines.append(f'<p class="error">{escape(state.error)}</p>')
    return '<div class="messages">' + "".join(lines) + "</div>"


def render_candidates(candidates: tuple[LocationCandidate, ...], disabled: bool = False) -> str:
    attr = " disabled" if disabled else ""
    items = []
    for loc in candidates:
        title = escape(loc.name)
        if loc.admin1:
            title += f", {escape(loc.admin1)}"
        title += f" &mdash; {escape(loc.country)}"
        items.append(
            '<button class="candidate" type="submit" name="candidate_id" '
            f'value="{escape(loc.id)}"{attr}>'
            f"<strong>{title}</strong><br>"
            f'<span class="muted">Lat: {loc.latitude}, Lon: {loc.longitude}</span>'
            "</button>"
        )
    return (
        '<section class="panel candidates">'
        "<p><strong>Select a location</strong></p>"
        f'<form method="post" action="/select" onsubmit="{_DISABLE_ON_SUBMIT}">' + "".join(items) + "</form>"
        "</section>"
    )


def render_weather_card(place_label: str, weather: WeatherResponse) -> str:
    """Render the current-conditions card, or nothing if the response has no current block."""
    cur = weather.current
    if cur is None:
        return ""
    condition = weather_code_to_text(cur.weather_code)
    day_night = "Day" if cur.is_daytime else "Night"
    return (
        '<section class="panel weather">'
        f"<h2>{escape(place_label)}</h2>"
        f'<p class="status">{escape(condition)} &bull; {day_night}</p>'
        f'<p class="muted">Timezone: {escape(weather.timezone)}</p>'
        f'<p class="temp">{round_half_up(cur.temperature_2m)}&deg;C</p>'
        f'<p class="status">Feels like {round_half_up(cur.apparent_temperature)}&deg;C</p>'
        '<div class="stats">'
        f"<div><span class=\"muted\">Humidity</span><br><strong>{format_number(cur.relative_humidity_2m)}%</strong></div>"
        f"<div><span class=\"muted\">Wind</span><br><strong>{format_number(cur.wind_speed_10m)} km/h</strong></div>"
        "</div></section>"
    )
