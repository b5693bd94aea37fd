"""Registry of connected extension peers."""

from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocketDisconnect

from browser_tools.errors import TransportError
from browser_tools.state.peer import PeerConnection

logger = logging.getLogger(__name__)


class PeerRegistry:
    """Live set of peer channels.

    All methods run on the event loop thread, so the set needs no lock; a
    broadcast iterates over a snapshot so peers may come and go while sends
    are in flight.
    """

    def __init__(self) -> None:
        self._peers: dict[str, PeerConnection] = {}

    def register(self, peer: PeerConnection) -> None:
        self._peers[peer.peer_id] = peer

    def unregister(self, peer: PeerConnection) -> bool:
        peer.open = False
        return self._peers.pop(peer.peer_id, None) is not None

    def count(self) -> int:
        return len(self._peers)

    def __contains__(self, peer: object) -> bool:
        return isinstance(peer, PeerConnection) and peer.peer_id in self._peers

    def snapshot(self) -> list[PeerConnection]:
        return list(self._peers.values())

    async def send(self, peer: PeerConnection, text: str) -> None:
        """Send to one peer, unregistering it if the channel has failed."""
        if not peer.open:
            raise TransportError(peer_id=peer.peer_id, reason="channel closed")
        try:
            await peer.ws.send_text(text)
        except WebSocketDisconnect as exc:
            self.unregister(peer)
            raise TransportError(peer_id=peer.peer_id, reason=f"disconnected ({exc.code})") from exc
        except Exception as exc:
            self.unregister(peer)
            logger.info("peer %s dropped after send failure. Active: %s", peer.peer_id, self.count())
            raise TransportError(peer_id=peer.peer_id, reason=str(exc) or type(exc).__name__) from exc

    async def _deliver(self, peer: PeerConnection, text: str) -> bool:
        try:
            await self.send(peer, text)
        except TransportError as exc:
            logger.debug("broadcast skipped %s", exc)
            return False
        return True

    async def broadcast(self, text: str) -> int:
        """Deliver ``text`` to every open peer; return how many it reached."""
        targets = [peer for peer in self.snapshot() if peer.open]
        if not targets:
            return 0
        delivered = await asyncio.gather(*(self._deliver(peer, text) for peer in targets))
        return sum(1 for ok in delivered if ok)

    def close(self) -> int:
        peers = self.snapshot()
        for peer in peers:
            peer.open = False
        self._peers.clear()
        return len(peers)


__all__ = ["PeerRegistry"]
