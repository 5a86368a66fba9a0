"""Weather dashboard: FastAPI app serving the screen as HTML and JSON."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel

from weatherapp import __version__
from weatherapp.config.schema import AppConfig
from weatherapp.display.formatters import format_screen_html, screen_to_dict
from weatherapp.display.views import build_screen, submit_search
from weatherapp.screen.controller import ScreenController, build_controller

logger = logging.getLogger(__name__)


class SearchRequest(BaseModel):
    city: str


def create_app(
    config: AppConfig, controller: ScreenController | None = None
) -> FastAPI:
    """Build the app around one controller, mounted on startup."""
    controller = controller or build_controller(config)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        await controller.mount()
        yield

    app = FastAPI(title="Weather Dashboard", version=__version__, lifespan=lifespan)

    def _screen() -> dict:
        return screen_to_dict(build_screen(controller.state))

    # ── JSON API ────────────────────────────────────────────────

    @app.get("/api/screen")
    async def get_screen():
        return _screen()

    @app.post("/api/search")
    async def post_search(req: SearchRequest):
        city = submit_search(req.city)
        if city is None:
            raise HTTPException(422, "City name is required")
        await controller.search(city)
        return _screen()

    @app.post("/api/refresh")
    async def post_refresh():
        await controller.refresh()
        return _screen()

    @app.post("/api/retry")
    async def post_retry():
        await controller.retry()
        return _screen()

    @app.post("/api/unit/toggle")
    async def post_toggle_unit():
        controller.toggle_unit()
        return _screen()

    @app.get("/api/health")
    async def get_health():
        state = controller.state
        return {
            "status": "ok",
            "phase": state.phase,
            "unit": state.unit,
            "has_data": state.has_data,
        }

    # ── HTML page and its form actions ──────────────────────────

    @app.get("/", response_class=HTMLResponse)
    async def serve_page():
        return HTMLResponse(format_screen_html(build_screen(controller.state)))

    @app.post("/search")
    async def page_search(city: str = Form("")):
        query = submit_search(city)
        if query is not None:
            await controller.search(query)
        return RedirectResponse("/", status_code=303)

    @app.post("/refresh")
    async def page_refresh():
        await controller.refresh()
        return RedirectResponse("/", status_code=303)

    @app.post("/unit")
    async def page_toggle_unit():
        controller.toggle_unit()
        return RedirectResponse("/", status_code=303)

    return app
