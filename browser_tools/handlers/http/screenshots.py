"""Screenshot endpoints: AI capture, direct upload, listing."""

from __future__ import annotations

import asyncio
import logging

from fastapi import Query, Depends, Request, APIRouter
from fastapi.responses import ORJSONResponse

from browser_tools.state.runtime import RuntimeDeps
from browser_tools.storage.encoding import decode_image_data
from browser_tools.config.capture import MAX_SCREENSHOT_TIMEOUT_S
from browser_tools.errors import StorageFailure, InvalidRequest, RequestTimeout, NoPeerAvailable

from .deps import get_runtime_deps, read_json_object

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_STATUS = {
    InvalidRequest.kind: 400,
    NoPeerAvailable.kind: 503,
    RequestTimeout.kind: 408,
}


@router.post("/api/screenshot")
async def capture_screenshot(
    request: Request,
    timeout: float | None = Query(
        default=None,
        gt=0,
        le=MAX_SCREENSHOT_TIMEOUT_S,
        allow_inf_nan=False,
        description="Seconds to wait for the extension",
    ),
    deps: RuntimeDeps = Depends(get_runtime_deps),
) -> ORJSONResponse:
    """Ask the connected extension(s) for a screenshot and wait for it."""
    try:
        options = await read_json_object(request, allow_empty=True)
    except ValueError as exc:
        return ORJSONResponse({"success": False, "error": str(exc)}, status_code=400)

    result = await deps.capture.capture(options, timeout_s=timeout)
    if result.success:
        return ORJSONResponse(result.to_dict())
    return ORJSONResponse(result.to_dict(), status_code=_ERROR_STATUS.get(result.error or "", 500))


@router.post("/screenshot")
async def upload_screenshot(request: Request, deps: RuntimeDeps = Depends(get_runtime_deps)) -> ORJSONResponse:
    """Save a screenshot pushed directly by the extension over HTTP."""
    try:
        body = await read_json_object(request)
    except ValueError as exc:
        return ORJSONResponse({"success": False, "error": str(exc)}, status_code=400)

    path_hint = body.get("path")
    try:
        image = decode_image_data(body.get("data"))
        target = deps.screenshots.upload_target(path_hint if isinstance(path_hint, str) else None)
        await asyncio.to_thread(deps.screenshots.write, target, image)
    except StorageFailure as exc:
        logger.error("failed to save uploaded screenshot: %s", exc)
        return ORJSONResponse({"success": False, "error": str(exc)}, status_code=500)

    return ORJSONResponse({"success": True, "path": str(target), "message": "Screenshot saved successfully"})


@router.get("/api/screenshots")
async def list_screenshots(deps: RuntimeDeps = Depends(get_runtime_deps)) -> ORJSONResponse:
    try:
        screenshots = await asyncio.to_thread(deps.screenshots.list_screenshots)
    except OSError as exc:
        return ORJSONResponse({"success": False, "error": str(exc)}, status_code=500)
    return ORJSONResponse({"success": True, "screenshots": screenshots})


__all__ = ["router"]
