# ABOUTME: Runs the search and pick flows against Open-Meteo and stores per-session state.
# ABOUTME: Maps resolver/fetcher failures to fixed user-facing messages via the session reducer.

import logging
from collections import OrderedDict

import httpx

from cityweather.errors import FetchFailure, ResolveFailure
from cityweather.session import (
    Action,
    LocationPicked,
    Phase,
    SearchFailed,
    SearchRequested,
    SearchSucceeded,
    SessionState,
    WeatherFailed,
    WeatherLoaded,
    reduce,
)
from cityweather.weather_service import get_current_weather, search_locations

logger = logging.getLogger(__name__)


class SessionStore:
    """In-memory SessionState per browser session, bounded by least recent use.

    All access happens on the event loop thread, so no locking is needed. The
    flows below always apply network outcomes to the latest stored state, not
    to the state they started from.
    """

    def __init__(self, max_sessions: int = 1000, default_query: str = ""):
        self.max_sessions = max_sessions
        self.default_query = default_query
        self._states: OrderedDict[str, SessionState] = OrderedDict()

    def get(self, session_id: str) -> SessionState:
        state = self._states.get(session_id)
        if state is None:
            state = SessionState(query=self.default_query)
            self._put(session_id, state)
        else:
            self._states.move_to_end(session_id)
        return state

    def apply(self, session_id: str, action: Action) -> SessionState:
        """Reduce the action into the session's current state and store the result."""
        state = reduce(self.get(session_id), action)
        self._put(session_id, state)
        return state

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._states

    def _put(self, session_id: str, state: SessionState) -> None:
        self._states[session_id] = state
        self._states.move_to_end(session_id)
        while len(self._states) > self.max_sessions:
            evicted, _ = self._states.popitem(last=False)
            logger.debug("Evicted session %s", evicted)


async def search(store: SessionStore, session_id: str, client: httpx.AsyncClient, query: str) -> SessionState:
    """Handle a search submission: validate, geocode, and record the outcome."""
    state = store.apply(session_id, SearchRequested(query=query))
    if state.phase is not Phase.SEARCHING:
        return state

    # Anything that escapes below still lands the session in an error state.
    outcome: SearchSucceeded | SearchFailed = SearchFailed(generation=state.generation)
    try:
        candidates = await search_locations(client, state.query)
        logger.info("Found %d location(s) for %r", len(candidates), state.query)
        outcome = SearchSucceeded(generation=state.generation, candidates=tuple(candidates))
    except ResolveFailure:
        logger.warning("Location search failed for %r", state.query, exc_info=True)
    finally:
        state = _complete(store, session_id, outcome)
    return state


async def pick_location(
    store: SessionStore, session_id: str, client: httpx.AsyncClient, candidate_id: str
) -> SessionState:
    """Handle a candidate pick: fetch current weather for its coordinates."""
    previous = store.get(session_id).generation
    state = store.apply(session_id, LocationPicked(candidate_id=candidate_id))
    if state.generation == previous or state.selected is None:
        logger.debug("Ignoring pick of unknown candidate %r", candidate_id)
        return state

    location = state.selected
    outcome: WeatherLoaded | WeatherFailed = WeatherFailed(generation=state.generation)
    try:
        weather = await get_current_weather(client, location.latitude, location.longitude)
        outcome = WeatherLoaded(generation=state.generation, weather=weather)
    except FetchFailure:
        logger.warning("Weather fetch failed for %s", location.label, exc_info=True)
    finally:
        state = _complete(store, session_id, outcome)
    return state


def _complete(
    store: SessionStore, session_id: str, outcome: SearchSucceeded | SearchFailed | WeatherLoaded | WeatherFailed
) -> SessionState:
    current = store.get(session_id)
    if current.generation != outcome.generation:
        logger.debug(
            "Discarding stale %s for session %s (generation %d, current %d)",
            type(outcome).__name__,
            session_id,
            outcome.generation,
            current.generation,
        )
        return current
    return store.apply(session_id, outcome)
