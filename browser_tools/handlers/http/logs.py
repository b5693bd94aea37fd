"""Extension log ingestion and query endpoints."""

from __future__ import annotations

import logging

from fastapi import Query, Depends, Request, APIRouter
from fastapi.responses import ORJSONResponse

from browser_tools.config.logs import DEFAULT_LOGS_LIMIT
from browser_tools.state.runtime import RuntimeDeps

from .deps import get_runtime_deps, read_json_object

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/extension-log")
async def ingest_log(request: Request, deps: RuntimeDeps = Depends(get_runtime_deps)) -> ORJSONResponse:
    try:
        body = await read_json_object(request)
    except ValueError as exc:
        return ORJSONResponse({"success": False, "error": str(exc)}, status_code=400)

    record = body.get("data")
    if not isinstance(record, dict):
        return ORJSONResponse({"success": False, "error": "'data' must be an object"}, status_code=400)

    count = deps.logs.append(record)
    logger.debug("extension log received (%s); total=%s network=%s", record.get("type"), count, deps.logs.network_count)
    return ORJSONResponse({"success": True, "logCount": count})


@router.get("/api/logs")
async def get_logs(
    limit: int = Query(default=DEFAULT_LOGS_LIMIT, ge=0),
    log_type: str | None = Query(default=None, alias="type"),
    deps: RuntimeDeps = Depends(get_runtime_deps),
) -> ORJSONResponse:
    logs, total = deps.logs.entries(limit=limit, log_type=log_type)
    return ORJSONResponse({
        "success": True,
        "logs": logs,
        "total": total,
        "filters": {"type": log_type, "limit": limit},
    })


@router.post("/wipelogs")
async def wipe_logs(deps: RuntimeDeps = Depends(get_runtime_deps)) -> ORJSONResponse:
    deps.logs.wipe()
    logger.info("all logs wiped")
    return ORJSONResponse({"success": True, "message": "All logs wiped successfully"})


__all__ = ["router"]
