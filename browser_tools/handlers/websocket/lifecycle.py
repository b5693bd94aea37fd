"""Idle deadline for a single peer channel."""

from __future__ import annotations

import time
import asyncio
import logging
from typing import Any

from browser_tools.config.websocket import WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON

logger = logging.getLogger(__name__)


class PeerLifecycle:
    """Close a peer that has been silent for ``idle_timeout_s``.

    Inbound frames only stamp the clock. One ``loop.call_later`` alarm checks
    the deadline when it fires and re-arms itself for whatever is left of the
    window, so a chatty peer costs nothing per frame. Disabled if
    idle_timeout_s <= 0.
    """

    def __init__(self, websocket: Any, *, idle_timeout_s: float) -> None:
        self._ws = websocket
        self._idle_timeout_s = float(idle_timeout_s)
        self._last_seen = time.monotonic()
        self._alarm: asyncio.TimerHandle | None = None
        self._closing: asyncio.Task | None = None

    def touch(self) -> None:
        self._last_seen = time.monotonic()

    def expired(self) -> bool:
        return self._closing is not None

    def start(self) -> asyncio.TimerHandle | None:
        if self._idle_timeout_s <= 0 or self.expired():
            return None
        if self._alarm is None:
            self._arm(self._idle_timeout_s)
        return self._alarm

    async def stop(self) -> None:
        if self._alarm is not None:
            self._alarm.cancel()
            self._alarm = None
        if self._closing is not None:
            await self._closing

    def _arm(self, delay_s: float) -> None:
        self._alarm = asyncio.get_running_loop().call_later(delay_s, self._on_alarm)

    def _on_alarm(self) -> None:
        self._alarm = None
        remaining = self._idle_timeout_s - (time.monotonic() - self._last_seen)
        if remaining > 0:
            self._arm(remaining)
            return
        logger.info("peer silent for %.1fs; closing connection", self._idle_timeout_s)
        self._closing = asyncio.get_running_loop().create_task(self._close())

    async def _close(self) -> None:
        try:
            await self._ws.close(code=WS_CLOSE_IDLE_CODE, reason=WS_CLOSE_IDLE_REASON)
        except Exception as exc:
            logger.debug("idle close did not complete: %s", exc)


__all__ = ["PeerLifecycle"]
