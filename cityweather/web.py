# ABOUTME: ASGI web entry point for the city weather UI.
# ABOUTME: Starlette routes for the page, search, and location pick, plus the uvicorn launcher.

import logging
from contextlib import asynccontextmanager
from uuid import uuid4

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from starlette.routing import Route

from cityweather import controller
from cityweather.config import configure_logging, load_settings
from cityweather.deps import WeatherDeps, create_deps
from cityweather.render import render_page

logger = logging.getLogger(__name__)

SESSION_COOKIE = "cityweather_session"


def _session_id(request: Request) -> tuple[str, bool]:
    """Return the caller's session id and whether it was newly issued."""
    session_id = request.cookies.get(SESSION_COOKIE)
    if session_id:
        return session_id, False
    return uuid4().hex, True


def _with_session(response: Response, session_id: str, is_new: bool) -> Response:
    if is_new:
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


async def index(request: Request) -> Response:
    deps: WeatherDeps = request.app.state.deps
    session_id, is_new = _session_id(request)
    state = deps.sessions.get(session_id)
    return _with_session(HTMLResponse(render_page(state)), session_id, is_new)


async def search(request: Request) -> Response:
    deps: WeatherDeps = request.app.state.deps
    session_id, is_new = _session_id(request)
    form = await request.form()
    query = str(form.get("query", ""))
    await controller.search(deps.sessions, session_id, deps.http_client, query)
    return _with_session(RedirectResponse("/", status_code=303), session_id, is_new)


async def select(request: Request) -> Response:
    deps: WeatherDeps = request.app.state.deps
    session_id, is_new = _session_id(request)
    form = await request.form()
    candidate_id = str(form.get("candidate_id", ""))
    await controller.pick_location(deps.sessions, session_id, deps.http_client, candidate_id)
    return _with_session(RedirectResponse("/", status_code=303), session_id, is_new)


async def health(request: Request) -> Response:
    return JSONResponse({"status": "ok"})


def create_app(deps: WeatherDeps | None = None) -> Starlette:
    """Build the Starlette app.

    When no deps are given they are created from settings on startup, and the
    HTTP client is closed on shutdown. Injected deps are left for the caller to close.
    """

    @asynccontextmanager
    async def lifespan(app: Starlette):
        if deps is not None:
            app.state.deps = deps
            yield
            return
        app.state.deps = create_deps(load_settings())
        try:
            yield
        finally:
            await app.state.deps.http_client.aclose()

    app = Starlette(
        routes=[
            Route("/", index, methods=["GET"]),
            Route("/search", search, methods=["POST"]),
            Route("/select", select, methods=["POST"]),
            Route("/health", health, methods=["GET"]),
        ],
        lifespan=lifespan,
    )
    if deps is not None:
        app.state.deps = deps
    return app


app = create_app()


def main() -> None:
    """Run the app with uvicorn using CITYWEATHER_* settings."""
    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("Starting city weather on http://%s:%d", settings.host, settings.port)
    uvicorn.run("cityweather.web:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
