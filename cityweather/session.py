# ABOUTME: Immutable session state and the pure reducer that drives the search/pick flow.
# ABOUTME: Each user action or network outcome produces a new SessionState; nothing is mutated.

from enum import Enum

from pydantic import BaseModel, ConfigDict

from cityweather.models import LocationCandidate, WeatherResponse

EMPTY_QUERY_MESSAGE = "Please enter a city name."
NO_MATCHES_MESSAGE = "No matching locations found."
SEARCH_FAILED_MESSAGE = "Failed to search locations. Check internet and try again."
FETCH_FAILED_MESSAGE = "Failed to fetch weather for this location."

SEARCHING_STATUS = "Searching locations..."
SELECT_STATUS = "Select a location below."
FETCHING_STATUS = "Fetching current weather..."
DONE_STATUS = "Done"


class Phase(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    AWAITING_SELECTION = "awaiting_selection"
    FETCHING_WEATHER = "fetching_weather"
    DONE = "done"
    ERROR = "error"


class SessionState(BaseModel):
    """Everything the page needs to render one browser session."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    status: str = ""
    error: str = ""
    candidates: tuple[LocationCandidate, ...] = ()
    selected: LocationCandidate | None = None
    weather: WeatherResponse | None = None
    phase: Phase = Phase.IDLE
    generation: int = 0

    @property
    def in_flight(self) -> bool:
        return self.phase in (Phase.SEARCHING, Phase.FETCHING_WEATHER)

    def find_candidate(self, candidate_id: str) -> LocationCandidate | None:
        for candidate in self.candidates:
            if candidate.id == candidate_id:
                return candidate
        return None


class SearchRequested(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str


class SearchSucceeded(BaseModel):
    model_config = ConfigDict(frozen=True)

    generation: int
    candidates: tuple[LocationCandidate, ...]


class SearchFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    generation: int


class LocationPicked(BaseModel):
    model_config = ConfigDict(frozen=True)

    candidate_id: str


class WeatherLoaded(BaseModel):
    model_config = ConfigDict(frozen=True)

    generation: int
    weather: WeatherResponse


class WeatherFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    generation: int


Action = SearchRequested | SearchSucceeded | SearchFailed | LocationPicked | WeatherLoaded | WeatherFailed

_COMPLETIONS = (SearchSucceeded, SearchFailed, WeatherLoaded, WeatherFailed)


def reduce(state: SessionState, action: Action) -> SessionState:
    """Apply one action to a session and return the resulting state.

    Network outcomes carry the generation of the request that produced them.
    An outcome from an older generation is stale (a newer search or pick has
    started since) and leaves the state unchanged. Every user action bumps the
    generation, including a rejected empty search.
    """
    if isinstance(action, _COMPLETIONS) and action.generation != state.generation:
        return state

    if isinstance(action, SearchRequested):
        query = action.query.strip()
        if not query:
            return state.model_copy(
                update={
                    "query": action.query,
                    "status": "",
                    "error": EMPTY_QUERY_MESSAGE,
                    "selected": None,
                    "weather": None,
                    "phase": Phase.ERROR,
                    "generation": state.generation + 1,
                }
            )
        return SessionState(
            query=query,
            status=SEARCHING_STATUS,
            phase=Phase.SEARCHING,
            generation=state.generation + 1,
        )

    if isinstance(action, SearchSucceeded):
        if not action.candidates:
            return state.model_copy(
                update={"candidates": (), "status": "", "error": NO_MATCHES_MESSAGE, "phase": Phase.ERROR}
            )
        return state.model_copy(
            update={"candidates": action.candidates, "status": SELECT_STATUS, "phase": Phase.AWAITING_SELECTION}
        )

    if isinstance(action, SearchFailed):
        return state.model_copy(update={"status": "", "error": SEARCH_FAILED_MESSAGE, "phase": Phase.ERROR})

    if isinstance(action, LocationPicked):
        candidate = state.find_candidate(action.candidate_id)
        if candidate is None:
            return state
        return state.model_copy(
            update={
                "selected": candidate,
                "weather": None,
                "status": FETCHING_STATUS,
                "error": "",
                "phase": Phase.FETCHING_WEATHER,
                "generation": state.generation + 1,
            }
        )

    if isinstance(action, WeatherLoaded):
        return state.model_copy(update={"weather": action.weather, "status": DONE_STATUS, "phase": Phase.DONE})

    if isinstance(action, WeatherFailed):
        return state.model_copy(update={"status": "", "error": FETCH_FAILED_MESSAGE, "phase": Phase.ERROR})

    raise TypeError(f"Unknown action: {action!r}")
