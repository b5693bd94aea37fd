"""Reply demultiplexer: the single listener for every inbound peer frame."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Awaitable

import orjson

from browser_tools.state.peer import PeerConnection
from browser_tools.state.browser import BrowserState
from browser_tools.state.messages import PeerMessage
from browser_tools.logbuffer.buffer import LogBuffer
from browser_tools.peers.registry import PeerRegistry
from browser_tools.storage.encoding import decode_image_data
from browser_tools.storage.screenshots import ScreenshotStore
from browser_tools.correlation.table import CorrelationTable
from browser_tools.config.logs import LOG_TYPES
from browser_tools.config.capture import EXTENSION_FILENAME_PREFIX
from browser_tools.errors import StorageFailure, TransportError, MalformedPeerMessage
from browser_tools.config.websocket import (
    WS_KEY_URL,
    WS_KEY_TYPE,
    WS_KEY_TAB_ID,
    MSG_HEARTBEAT,
    MSG_PAGE_NAVIGATED,
    MSG_SCREENSHOT_DATA,
    MSG_HEARTBEAT_RESPONSE,
)

from .parser import parse_peer_message

logger = logging.getLogger(__name__)

HandlerFn = Callable[[PeerConnection, PeerMessage], Awaitable[None]]

_HEARTBEAT_RESPONSE = orjson.dumps({WS_KEY_TYPE: MSG_HEARTBEAT_RESPONSE}).decode("utf-8")


class ReplyDemultiplexer:
    """Route peer frames by type; capture replies go to the correlation table by id.

    Replies for ids that are unknown, already answered, or timed out are
    expected under races and dropped quietly. Nothing a peer sends escapes
    ``handle`` as an exception.
    """

    def __init__(
        self,
        *,
        peers: PeerRegistry,
        correlations: CorrelationTable,
        logs: LogBuffer,
        browser: BrowserState,
        screenshots: ScreenshotStore,
    ) -> None:
        self._peers = peers
        self._correlations = correlations
        self._logs = logs
        self._browser = browser
        self._screenshots = screenshots
        self._handlers: dict[str, HandlerFn] = {
            MSG_SCREENSHOT_DATA: self._handle_screenshot_data,
            MSG_HEARTBEAT: self._handle_heartbeat,
            MSG_PAGE_NAVIGATED: self._handle_page_navigated,
        }
        for log_type in LOG_TYPES:
            self._handlers[log_type] = self._handle_log_record

    async def handle(self, peer: PeerConnection, raw: str | bytes) -> PeerMessage | None:
        try:
            msg = parse_peer_message(raw)
        except MalformedPeerMessage as exc:
            logger.warning("dropping malformed message from peer %s: %s", peer.peer_id, exc)
            return None

        handler = self._handlers.get(msg.type)
        if handler is None:
            logger.debug("ignoring '%s' message from peer %s", msg.type, peer.peer_id)
            return msg

        try:
            await handler(peer, msg)
        except Exception:
            logger.exception("handler for '%s' failed (peer %s)", msg.type, peer.peer_id)
        return msg

    async def _handle_screenshot_data(self, peer: PeerConnection, msg: PeerMessage) -> None:
        if msg.request_id is None:
            await self._save_unsolicited(peer, msg)
            return
        if self._correlations.resolve(msg.request_id, msg.data):
            logger.debug("request %s answered by peer %s", msg.request_id, peer.peer_id)
            return
        logger.debug("discarding reply for unknown or settled request %s (peer %s)", msg.request_id, peer.peer_id)

    async def _save_unsolicited(self, peer: PeerConnection, msg: PeerMessage) -> None:
        # Extension-initiated capture: nobody is waiting, just keep the image.
        path_hint = msg.body.get("path")
        try:
            image = decode_image_data(msg.data or "")
            await asyncio.to_thread(
                self._screenshots.save,
                image,
                path_hint if isinstance(path_hint, str) else None,
                prefix=EXTENSION_FILENAME_PREFIX,
            )
        except StorageFailure as exc:
            logger.warning("failed to save extension screenshot from peer %s: %s", peer.peer_id, exc)

    async def _handle_heartbeat(self, peer: PeerConnection, _msg: PeerMessage) -> None:
        try:
            await self._peers.send(peer, _HEARTBEAT_RESPONSE)
        except TransportError as exc:
            logger.debug("heartbeat response not delivered: %s", exc)

    async def _handle_page_navigated(self, peer: PeerConnection, msg: PeerMessage) -> None:
        url = msg.body.get(WS_KEY_URL)
        if not isinstance(url, str):
            logger.warning("page-navigated from peer %s without a url", peer.peer_id)
            return
        self._browser.navigate(url, msg.body.get(WS_KEY_TAB_ID))
        logger.info("page navigated: %s", url)

    async def _handle_log_record(self, _peer: PeerConnection, msg: PeerMessage) -> None:
        self._logs.append(msg.body)


__all__ = ["ReplyDemultiplexer"]
