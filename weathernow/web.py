# ABOUTME: ASGI web entry point for the WeatherNow single-page UI.
# ABOUTME: Starlette app serving the page and the JSON endpoints that drive each session's controller.

import json
import logging
from collections import OrderedDict
from contextlib import asynccontextmanager
from pathlib import Path
from uuid import uuid4

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import FileResponse, JSONResponse, Response
from starlette.routing import Route

from weathernow.config import Settings
from weathernow.controller import WeatherController
from weathernow.deps import WeatherDeps, create_http_client
from weathernow.presentation import render_view

logger = logging.getLogger(__name__)

SESSION_COOKIE = "weathernow_session"
PAGE_PATH = Path(__file__).parent / "static" / "index.html"


class SessionRegistry:
    """In-memory controllers keyed by session id, evicting the least recently used."""

    def __init__(self, deps: WeatherDeps):
        self.deps = deps
        self._controllers: OrderedDict[str, WeatherController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._controllers)

    def get(self, session_id: str) -> WeatherController:
        controller = self._controllers.get(session_id)
        if controller is None:
            controller = WeatherController(self.deps.http_client)
            self._controllers[session_id] = controller
            while len(self._controllers) > self.deps.settings.max_sessions:
                evicted, _ = self._controllers.popitem(last=False)
                logger.info("Evicted idle session %s", evicted)
        else:
            self._controllers.move_to_end(session_id)
        return controller


def _session_id(request: Request) -> tuple[str, bool]:
    """Return the caller's session id and whether it was freshly minted."""
    existing = request.cookies.get(SESSION_COOKIE)
    if existing:
        return existing, False
    return uuid4().hex, True


def _respond(response: Response, session_id: str, is_new: bool) -> Response:
    if is_new:
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


def _view_response(controller: WeatherController, session_id: str, is_new: bool) -> Response:
    return _respond(JSONResponse(render_view(controller.state)), session_id, is_new)


async def _read_field(request: Request, field: str) -> str:
    """Read one string field from a JSON request body."""
    try:
        data = json.loads(await request.body())
    except ValueError as e:
        raise ValueError(f"Request body is not valid JSON: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get(field), str):
        raise ValueError(f"Expected a JSON object with a string '{field}'")
    return data[field]


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"detail": message}, status_code=400)


async def page(request: Request) -> Response:
    session_id, is_new = _session_id(request)
    return _respond(FileResponse(PAGE_PATH, media_type="text/html"), session_id, is_new)


async def get_state(request: Request) -> Response:
    session_id, is_new = _session_id(request)
    controller = request.app.state.sessions.get(session_id)
    return _view_response(controller, session_id, is_new)


async def text_input(request: Request) -> Response:
    """Handle a keystroke; answers once any suggestion fetch it started has settled."""
    try:
        text = await _read_field(request, "text")
    except ValueError as e:
        return _bad_request(str(e))
    session_id, is_new = _session_id(request)
    controller = request.app.state.sessions.get(session_id)

    task = controller.on_text_change(text)
    if task is not None:
        await task
    return _view_response(controller, session_id, is_new)


async def pick(request: Request) -> Response:
    try:
        name = await _read_field(request, "name")
    except ValueError as e:
        return _bad_request(str(e))
    session_id, is_new = _session_id(request)
    controller = request.app.state.sessions.get(session_id)

    controller.on_suggestion_pick(name)
    return _view_response(controller, session_id, is_new)


async def submit(request: Request) -> Response:
    session_id, is_new = _session_id(request)
    controller = request.app.state.sessions.get(session_id)

    await controller.on_submit()
    return _view_response(controller, session_id, is_new)


def create_app(deps: WeatherDeps) -> Starlette:
    """Build the app around shared deps; the HTTP client is closed on shutdown."""

    @asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        await deps.http_client.aclose()

    app = Starlette(
        routes=[
            Route("/", page),
            Route("/api/state", get_state),
            Route("/api/input", text_input, methods=["POST"]),
            Route("/api/pick", pick, methods=["POST"]),
            Route("/api/submit", submit, methods=["POST"]),
        ],
        lifespan=lifespan,
    )
    app.state.sessions = SessionRegistry(deps)
    return app


settings = Settings.from_env()

app = create_app(WeatherDeps(http_client=create_http_client(settings), settings=settings))


def main() -> None:
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
