"""Runtime dependency construction (peer registry, correlation engine, stores)."""

from __future__ import annotations

import logging

from browser_tools.state import RuntimeDeps
from browser_tools.state.browser import BrowserState
from browser_tools.state.settings import AppSettings
from browser_tools.logbuffer.buffer import LogBuffer
from browser_tools.peers.registry import PeerRegistry
from browser_tools.storage.screenshots import ScreenshotStore
from browser_tools.correlation.facade import CaptureService
from browser_tools.correlation.table import CorrelationTable
from browser_tools.correlation.dispatcher import CommandDispatcher
from browser_tools.handlers.websocket.demux import ReplyDemultiplexer

from .settings import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    screenshots = ScreenshotStore(settings.capture.screenshot_dir)
    screenshots.ensure_directory()

    peers = PeerRegistry()
    correlations = CorrelationTable()
    logs = LogBuffer(max_entries=settings.logs.max_entries, trim_to=settings.logs.trim_to)
    browser = BrowserState()

    dispatcher = CommandDispatcher(
        peers=peers,
        correlations=correlations,
        default_timeout_s=settings.capture.timeout_s,
    )
    capture = CaptureService(peers=peers, dispatcher=dispatcher, screenshots=screenshots)
    demux = ReplyDemultiplexer(
        peers=peers,
        correlations=correlations,
        logs=logs,
        browser=browser,
        screenshots=screenshots,
    )

    logger.info("screenshots directory: %s", screenshots.directory)
    return RuntimeDeps(
        settings=settings,
        peers=peers,
        correlations=correlations,
        dispatcher=dispatcher,
        capture=capture,
        demux=demux,
        screenshots=screenshots,
        logs=logs,
        browser=browser,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
