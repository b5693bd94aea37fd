"""Request-scoped access to runtime dependencies and JSON bodies."""

from __future__ import annotations

from typing import Any

import orjson
from fastapi import Request

from browser_tools.state.runtime import RuntimeDeps


def get_runtime_deps(request: Request) -> RuntimeDeps:
    runtime_deps = getattr(request.app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


async def read_json_object(request: Request, *, allow_empty: bool = False) -> dict[str, Any]:
    """Parse the request body as a JSON object; raises ValueError otherwise."""
    body = await request.body()
    if not body.strip():
        if allow_empty:
            return {}
        raise ValueError("request body is empty")
    try:
        data = orjson.loads(body)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")
    return data


__all__ = ["get_runtime_deps", "read_json_object"]
