# ABOUTME: Dependency container for the web app using Pydantic BaseModel.
# ABOUTME: Holds the shared httpx.AsyncClient and the per-browser session store.

import httpx
from pydantic import BaseModel, ConfigDict

from cityweather.config import Settings
from cityweather.controller import SessionStore


class WeatherDeps(BaseModel):
    """Dependencies shared by every request handler."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    sessions: SessionStore


def create_http_client(timeout: float) -> httpx.AsyncClient:
    """Create an httpx client for the Open-Meteo APIs.

    Failures surface to the caller on the first attempt; there is no retry layer.
    """
    return httpx.AsyncClient(timeout=timeout, headers={"Accept": "application/json"})


def create_deps(settings: Settings) -> WeatherDeps:
    return WeatherDeps(
        http_client=create_http_client(settings.http_timeout),
        sessions=SessionStore(max_sessions=settings.max_sessions, default_query=settings.default_query),
    )
