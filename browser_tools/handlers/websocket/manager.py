"""Primary peer WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from browser_tools.state.peer import PeerConnection
from browser_tools.state.runtime import RuntimeDeps

from .lifecycle import PeerLifecycle
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def handle_peer_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    await ws.accept()

    peer = PeerConnection(ws=ws)
    runtime_deps.peers.register(peer)
    logger.info("extension connected peer=%s. Active: %s", peer.peer_id, runtime_deps.peers.count())

    lifecycle = PeerLifecycle(ws, idle_timeout_s=runtime_deps.settings.websocket.idle_timeout_s)
    lifecycle.start()
    try:
        await run_message_loop(
            ws,
            peer,
            lifecycle,
            runtime_deps.demux,
            tick_s=runtime_deps.settings.websocket.watchdog_tick_s,
        )
    except Exception:
        logger.warning("peer %s transport error", peer.peer_id, exc_info=True)
    finally:
        with contextlib.suppress(Exception):
            await lifecycle.stop()
        runtime_deps.peers.unregister(peer)
        logger.info("extension disconnected peer=%s. Active: %s", peer.peer_id, runtime_deps.peers.count())


__all__ = ["handle_peer_connection"]
