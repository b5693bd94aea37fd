"""Caller option payloads that decode fine but cannot be re-encoded."""

from __future__ import annotations

from typing import Any


def deeply_nested(depth: int = 300) -> dict[str, Any]:
    # orjson decodes up to 1024 levels but encodes at most 254.
    options: dict[str, Any] = {}
    for _ in range(depth):
        options = {"n": options}
    return options


__all__ = ["deeply_nested"]
