"""Identity, health, browser location and debug endpoints."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends, Request, APIRouter
from fastapi.responses import ORJSONResponse

from browser_tools import __version__
from browser_tools.config.logs import RECENT_WINDOW
from browser_tools.state.runtime import RuntimeDeps
from browser_tools.config.websocket import WS_KEY_URL, WS_KEY_TAB_ID
from browser_tools.config.server import ENDPOINTS, IDENTITY_NAME, IDENTITY_FEATURES, IDENTITY_SIGNATURE

from .deps import get_runtime_deps, read_json_object

logger = logging.getLogger(__name__)

router = APIRouter()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
@router.get("/healthz")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/.identity")
async def identity(deps: RuntimeDeps = Depends(get_runtime_deps)) -> ORJSONResponse:
    return ORJSONResponse({
        "signature": IDENTITY_SIGNATURE,
        "name": IDENTITY_NAME,
        "version": __version__,
        "port": str(deps.settings.server.port),
        "features": IDENTITY_FEATURES,
    })


@router.get("/api/current-url")
async def get_current_url(deps: RuntimeDeps = Depends(get_runtime_deps)) -> ORJSONResponse:
    return ORJSONResponse({"success": True, "url": deps.browser.current_url, "timestamp": _now_iso()})


@router.post("/current-url")
async def update_current_url(request: Request, deps: RuntimeDeps = Depends(get_runtime_deps)) -> ORJSONResponse:
    try:
        body = await read_json_object(request)
    except ValueError as exc:
        return ORJSONResponse({"success": False, "error": str(exc)}, status_code=400)

    url = body.get(WS_KEY_URL)
    if not isinstance(url, str):
        return ORJSONResponse({"success": False, "error": "'url' must be a string"}, status_code=400)

    deps.browser.navigate(url, body.get(WS_KEY_TAB_ID))
    logger.info("url updated: %s (tab %s)", url, deps.browser.tab_id)
    return ORJSONResponse({"success": True, "message": "URL updated"})


@router.get("/api/data")
async def get_data(deps: RuntimeDeps = Depends(get_runtime_deps)) -> ORJSONResponse:
    return ORJSONResponse({
        "success": True,
        "data": {
            "currentUrl": deps.browser.current_url,
            "logs": deps.logs.recent(RECENT_WINDOW),
            "networkRequests": deps.logs.recent_network(RECENT_WINDOW),
            "connectedClients": deps.peers.count(),
            "totalLogs": deps.logs.log_count,
            "totalNetworkRequests": deps.logs.network_count,
            "timestamp": _now_iso(),
        },
    })


@router.get("/api/debug")
async def get_debug(deps: RuntimeDeps = Depends(get_runtime_deps)) -> ORJSONResponse:
    return ORJSONResponse({
        "success": True,
        "debug": {
            "serverPort": deps.settings.server.port,
            "connectedClients": deps.peers.count(),
            "pendingRequests": len(deps.correlations),
            "logsCount": deps.logs.log_count,
            "networkRequestsCount": deps.logs.network_count,
            "currentUrl": deps.browser.current_url,
            "uptime": deps.uptime_s(),
            "endpoints": ENDPOINTS,
        },
    })


__all__ = ["router"]
