# ABOUTME: Tests for HTML rendering of session state.
# ABOUTME: Checks which panels appear per phase, value formatting, and escaping of untrusted text.

import pytest
from conftest import CHENNAI_RESULT, FORECAST_PAYLOAD

from cityweather.models import WeatherResponse
from cityweather.render import format_number, render_page, render_weather_card, round_half_up
from cityweather.session import LocationPicked, Phase, SearchRequested, SearchSucceeded, SessionState, WeatherLoaded, reduce
from cityweather.weather_service import parse_candidate

CHENNAI = parse_candidate(CHENNAI_RESULT)
WEATHER = WeatherResponse.model_validate(FORECAST_PAYLOAD)


def _done_state() -> SessionState:
    state = reduce(SessionState(), SearchRequested(query="Chennai"))
    state = reduce(state, SearchSucceeded(generation=state.generation, candidates=(CHENNAI,)))
    state = reduce(state, LocationPicked(candidate_id=CHENNAI.id))
    return reduce(state, WeatherLoaded(generation=state.generation, weather=WEATHER))


class TestFormatting:
    @pytest.mark.parametrize("value,expected", [(31.5, 32), (31.4, 31), (-0.5, 0), (-1.6, -2), (35.2, 35)])
    def test_round_half_up(self, value, expected):
        """round_half_up rounds halves upward.

        Implementation: Rounds positive, negative, and half values.
        Passing implies: Displayed temperatures round half up, so 31.5 °C shows as 32.
        """
        assert round_half_up(value) == expected

    def test_format_number_drops_trailing_zero(self):
        """format_number prints whole floats without a decimal part.

        Implementation: Formats 62.0 and 14.4.
        Passing implies: Humidity reads "62%" not "62.0%".
        """
        assert format_number(62.0) == "62"
        assert format_number(14.4) == "14.4"


class TestRenderPage:
    def test_idle_page_has_search_form_only(self):
        """The first page shows the search form pre-filled with the query.

        Implementation: Renders a fresh state.
        Passing implies: No candidate list or weather card appears before a search.
        """
        html = render_page(SessionState(query="Chennai"))
        assert 'action="/search"' in html
        assert 'value="Chennai"' in html
        assert "Select a location" not in html
        assert "Feels like" not in html

    def test_awaiting_selection_lists_candidates(self):
        """Candidates are rendered as buttons carrying their ids.

        Implementation: Renders a state with one candidate.
        Passing implies: Each candidate can be picked via the /select form.
        """
        state = reduce(SessionState(), SearchRequested(query="Chennai"))
        state = reduce(state, SearchSucceeded(generation=state.generation, candidates=(CHENNAI,)))
        html = render_page(state)
        assert 'action="/select"' in html
        assert f'value="{CHENNAI.id}"' in html
        assert "Chennai, Tamil Nadu &mdash; India" in html
        assert "Lat: 13.08784, Lon: 80.27847" in html
        assert "Select a location below." in html

    def test_done_shows_weather_card(self):
        """A completed fetch renders the weather card.

        Implementation: Renders a Done state.
        Passing implies: Place label, condition text, temperatures, humidity, and wind are shown.
        """
        html = render_page(_done_state())
        assert "Chennai, Tamil Nadu, India" in html
        assert "Overcast &bull; Day" in html
        assert "Timezone: Asia/Kolkata" in html
        assert "32&deg;C" in html
        assert "Feels like 35&deg;C" in html
        assert "62%" in html
        assert "14.4 km/h" in html

    def test_in_flight_disables_buttons(self):
        """Buttons are disabled while a request is running.

        Implementation: Renders a Searching state.
        Passing implies: The same trigger cannot be fired twice from a stale page.
        """
        state = reduce(SessionState(), SearchRequested(query="Chennai"))
        assert state.phase is Phase.SEARCHING
        html = render_page(state)
        assert "disabled>...</button>" in html

    def test_escapes_user_and_api_text(self):
        """Query text and place names are HTML-escaped.

        Implementation: Renders a query and candidate containing markup.
        Passing implies: Untrusted input cannot inject HTML.
        """
        evil = CHENNAI.model_copy(update={"name": "<script>x</script>"})
        state = SessionState(query='"><b>', candidates=(evil,), phase=Phase.AWAITING_SELECTION)
        html = render_page(state)
        assert "<script>x</script>" not in html
        assert "&lt;script&gt;" in html
        assert 'value="&quot;&gt;&lt;b&gt;"' in html

    def test_error_is_rendered(self):
        """Errors appear in the message area.

        Implementation: Renders a blank-query error state.
        Passing implies: Validation feedback reaches the user.
        """
        state = reduce(SessionState(), SearchRequested(query=""))
        assert '<p class="error">Please enter a city name.</p>' in render_page(state)


class TestRenderWeatherCard:
    def test_night_and_unknown_code(self):
        """Night flag and unknown codes are rendered readably.

        Implementation: Renders a card with is_day 0 and code 9999.
        Passing implies: Any provider code still produces a label.
        """
        current = dict(FORECAST_PAYLOAD["current"], is_day=0, weather_code=9999)
        weather = WeatherResponse.model_validate(dict(FORECAST_PAYLOAD, current=current))
        html = render_weather_card("Somewhere", weather)
        assert "Weather code: 9999 &bull; Night" in html

    def test_missing_current_renders_nothing(self):
        """A response without a current block renders no card.

        Implementation: Renders a card for a bare response.
        Passing implies: Partial payloads never crash the page.
        """
        assert render_weather_card("Somewhere", WeatherResponse(latitude=0, longitude=0, timezone="GMT")) == ""
