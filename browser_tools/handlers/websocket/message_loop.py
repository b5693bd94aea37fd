"""Receive loop for one peer channel."""

from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect

from browser_tools.state.peer import PeerConnection

from .demux import ReplyDemultiplexer
from .lifecycle import PeerLifecycle

logger = logging.getLogger(__name__)


async def _recv_text_with_watchdog(
    ws: WebSocket,
    lifecycle: PeerLifecycle,
    tick_s: float,
) -> tuple[str | bytes | None, bool]:
    try:
        message = await asyncio.wait_for(ws.receive(), timeout=tick_s * 2)
    except TimeoutError:
        return None, lifecycle.expired()

    if message.get("type") == "websocket.disconnect":
        raise WebSocketDisconnect(code=message.get("code") or 1000, reason=message.get("reason"))
    text = message.get("text")
    if text is not None:
        return text, False
    # Binary frames are not part of the protocol; surface them so the parser rejects them.
    return message.get("bytes"), False


async def run_message_loop(
    ws: WebSocket,
    peer: PeerConnection,
    lifecycle: PeerLifecycle,
    demux: ReplyDemultiplexer,
    *,
    tick_s: float,
) -> None:
    """Feed every frame from ``peer`` to the demultiplexer until it disconnects."""
    try:
        while peer.open:
            raw, should_exit = await _recv_text_with_watchdog(ws, lifecycle, tick_s)
            if should_exit:
                return
            if raw is None:
                continue

            lifecycle.touch()
            await demux.handle(peer, raw)
    except WebSocketDisconnect as exc:
        logger.debug("peer %s disconnected (code=%s)", peer.peer_id, exc.code)


__all__ = ["run_message_loop"]
