"""Peer message parsing/validation for the extension wire format."""

from __future__ import annotations

from typing import Any

import orjson

from browser_tools.errors import MalformedPeerMessage
from browser_tools.state.messages import PeerMessage
from browser_tools.config.websocket import WS_KEY_DATA, WS_KEY_TYPE, WS_KEY_REQUEST_ID, MSG_SCREENSHOT_DATA


def _parse_request_id(value: Any) -> int | None:
    if value is None:
        return None
    # bool is an int subclass; a peer sending true/false is not naming a request.
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedPeerMessage(reason=f"'{WS_KEY_REQUEST_ID}' must be an integer")
    return value


def parse_peer_message(raw: str | bytes) -> PeerMessage:
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise MalformedPeerMessage(reason=f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise MalformedPeerMessage(reason="message must be a JSON object")

    msg_type = msg.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise MalformedPeerMessage(reason=f"message missing non-empty '{WS_KEY_TYPE}'")

    msg_type = msg_type.strip()
    data = None
    request_id = None
    if msg_type == MSG_SCREENSHOT_DATA:
        request_id = _parse_request_id(msg.get(WS_KEY_REQUEST_ID))
        data = msg.get(WS_KEY_DATA)
        if data is not None and not isinstance(data, str):
            raise MalformedPeerMessage(reason=f"'{WS_KEY_DATA}' must be a string")

    return PeerMessage(
        type=msg_type,
        request_id=request_id,
        data=data,
        body=msg,
    )


__all__ = ["parse_peer_message"]
