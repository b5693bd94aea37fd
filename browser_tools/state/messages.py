"""Peer wire records (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass

from browser_tools.config.websocket import (
    WS_KEY_TYPE,
    WS_KEY_TIMESTAMP,
    WS_KEY_REQUEST_ID,
    MSG_TAKE_SCREENSHOT,
    WS_RESERVED_COMMAND_KEYS,
)


@dataclass(frozen=True, slots=True)
class CommandRequest:
    """A capture command as broadcast to every connected peer."""

    request_id: int
    created_at_ms: int
    options: dict[str, Any] = field(default_factory=dict)
    kind: str = "capture"

    def to_wire(self) -> dict[str, Any]:
        message = {k: v for k, v in self.options.items() if k not in WS_RESERVED_COMMAND_KEYS}
        message[WS_KEY_TYPE] = MSG_TAKE_SCREENSHOT
        message[WS_KEY_REQUEST_ID] = self.request_id
        message[WS_KEY_TIMESTAMP] = self.created_at_ms
        return message


@dataclass(frozen=True, slots=True)
class PeerMessage:
    """A validated inbound frame from a peer."""

    type: str
    request_id: int | None = None
    data: str | None = None
    body: dict[str, Any] = field(default_factory=dict)


__all__ = ["CommandRequest", "PeerMessage"]
