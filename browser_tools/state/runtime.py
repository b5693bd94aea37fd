"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import time
import logging
from dataclasses import field, dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from browser_tools.state.browser import BrowserState
    from browser_tools.state.settings import AppSettings
    from browser_tools.logbuffer.buffer import LogBuffer
    from browser_tools.peers.registry import PeerRegistry
    from browser_tools.storage.screenshots import ScreenshotStore
    from browser_tools.correlation.facade import CaptureService
    from browser_tools.correlation.table import CorrelationTable
    from browser_tools.correlation.dispatcher import CommandDispatcher
    from browser_tools.handlers.websocket.demux import ReplyDemultiplexer


@dataclass(slots=True)
class RuntimeDeps:
    settings: AppSettings
    peers: PeerRegistry
    correlations: CorrelationTable
    dispatcher: CommandDispatcher
    capture: CaptureService
    demux: ReplyDemultiplexer
    screenshots: ScreenshotStore
    logs: LogBuffer
    browser: BrowserState
    started_at: float = field(default_factory=time.monotonic)

    def uptime_s(self) -> float:
        return time.monotonic() - self.started_at

    async def shutdown(self) -> None:
        try:
            pending = self.correlations.close()
            dropped = self.peers.close()
        except Exception:
            logger.exception("runtime shutdown failed")
            return
        logger.info("runtime: shut down (pending=%s peers=%s)", pending, dropped)


__all__ = ["RuntimeDeps"]
