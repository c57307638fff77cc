from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from .config import Settings, require_settings
from .messages import OutboundMessageRequest
from .pipeline import forward_message

log = logging.getLogger("maytapi_relay.main")

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


# --- Dependencies ---


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_transport(request: Request) -> httpx.AsyncBaseTransport | None:
    return request.app.state.transport


async def read_payload(request: Request) -> OutboundMessageRequest:
    """
    Parse the send-message body, accepting JSON or form posts.

    Anything that is not a JSON object or a form yields an empty request,
    which the handler then rejects with a 400.
    """
    content_type = request.headers.get("content-type", "").lower()

    data: Any
    if content_type.startswith(FORM_CONTENT_TYPES):
        try:
            form = await request.form()
        except (MultiPartException, StarletteHTTPException):
            log.warning("Ignoring malformed form body on /send-message")
            data = {}
        else:
            data = {key: value for key, value in form.items() if isinstance(value, str)}
    else:
        raw = await request.body()
        try:
            data = json.loads(raw) if raw else {}
        except (ValueError, RecursionError):
            log.warning("Ignoring malformed JSON body on /send-message")
            data = {}

    if not isinstance(data, dict):
        data = {}
    return OutboundMessageRequest.model_validate(data)


# --- App factory ---


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the relay application.

    When no settings are passed they are loaded from the environment, and the
    process exits if the Maytapi credentials are missing. This happens before
    uvicorn binds its socket, so `uvicorn --factory maytapi_relay.main:create_app`
    is safe to use directly.

    `transport` is handed to every outbound httpx client; tests use it to fake
    the Maytapi API.
    """
    if settings is None:
        settings = require_settings()

    app = FastAPI(title="maytapi-relay", version="0.1.0")
    app.state.settings = settings
    app.state.transport = transport

    index_path = settings.static_dir / "index.html"

    @app.get("/", include_in_schema=False)
    def landing_page() -> Response:
        if not index_path.is_file():
            return JSONResponse({"success": False, "message": "Not Found"}, status_code=404)
        return FileResponse(index_path)

    @app.post("/send-message")
    async def send_message_route(
        payload: OutboundMessageRequest = Depends(read_payload),
        app_settings: Settings = Depends(get_app_settings),
        app_transport: httpx.AsyncBaseTransport | None = Depends(get_transport),
    ) -> JSONResponse:
        """
        Forward one message to Maytapi.

        Accepts JSON or form data:

          { "countryCode": "+91", "phoneNumber": "9876543210", "message": "Hello" }
        """
        result = await forward_message(payload, app_settings, transport=app_transport)
        return JSONResponse(result.body, status_code=result.status_code)

    # Mounted last so the explicit routes above take precedence
    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir), name="static")
    else:
        log.warning("Static directory %s not found; only API routes are served", settings.static_dir)

    return app
