"""Main FastAPI server for the browser tools relay."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, WebSocket
from starlette.exceptions import HTTPException
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware

from browser_tools.state.settings import AppSettings
from browser_tools.runtime.logging import configure_logging
from browser_tools.config.websocket import WS_ENDPOINT_PATH
from browser_tools.runtime.dependencies import build_runtime_deps
from browser_tools.config.server import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS
from browser_tools.handlers.websocket.manager import handle_peer_connection
from browser_tools.handlers.http import logs_router, status_router, screenshots_router

logger = logging.getLogger(__name__)


async def _not_found(_request: Request, exc: HTTPException) -> ORJSONResponse:
    return ORJSONResponse({"error": "Not found"}, status_code=exc.status_code)


def create_app(settings: AppSettings | None = None) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        runtime_deps = build_runtime_deps(settings)
        app.state.runtime_deps = runtime_deps
        logger.info(
            "runtime: ready on port %s (websocket %s)",
            runtime_deps.settings.server.port,
            WS_ENDPOINT_PATH,
        )
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                await deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )
    app.add_exception_handler(404, _not_found)

    @app.middleware("http")
    async def _log_request(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    app.include_router(status_router)
    app.include_router(screenshots_router)
    app.include_router(logs_router)

    @app.websocket(WS_ENDPOINT_PATH)
    async def extension_websocket(websocket: WebSocket) -> None:
        runtime_deps = getattr(app.state, "runtime_deps", None)
        if runtime_deps is None:
            raise RuntimeError("Runtime dependencies are not initialized")
        await handle_peer_connection(websocket, runtime_deps)

    return app


configure_logging()

app = create_app()


__all__ = ["app", "create_app"]
