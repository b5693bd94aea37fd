"""Capture service: the request/response face of the peer round-trip."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from pathlib import Path

from browser_tools.peers.registry import PeerRegistry
from browser_tools.state.result import CaptureResult
from browser_tools.storage.encoding import decode_image_data
from browser_tools.storage.screenshots import ScreenshotStore
from browser_tools.config.capture import CAPTURE_OPTION_FILENAME, CAPTURE_FILENAME_PREFIX
from browser_tools.errors import (
    CaptureFailed,
    StorageFailure,
    RequestTimeout,
    InvalidRequest,
    NoPeerAvailable,
    describe_error,
)

from .dispatcher import CommandDispatcher

logger = logging.getLogger(__name__)


def _failure(exc: Exception, request_id: int | None = None) -> CaptureResult:
    return CaptureResult(success=False, error=describe_error(exc), message=str(exc), request_id=request_id)


class CaptureService:
    def __init__(
        self,
        *,
        peers: PeerRegistry,
        dispatcher: CommandDispatcher,
        screenshots: ScreenshotStore,
    ) -> None:
        self._peers = peers
        self._dispatcher = dispatcher
        self._screenshots = screenshots

    def _on_timeout(self, request_id: int) -> None:
        logger.warning("screenshot request %s timed out", request_id)

    async def capture(self, options: dict[str, Any] | None = None, timeout_s: float | None = None) -> CaptureResult:
        """Ask every connected peer for a screenshot and wait for the first reply.

        Failures come back as ``CaptureResult(success=False)``; only
        cancellation of the calling task propagates.
        """
        options = dict(options or {})
        if self._peers.count() == 0:
            logger.info("screenshot requested with no extension connected")
            return _failure(NoPeerAvailable())

        try:
            entry = await self._dispatcher.dispatch(options, timeout_s=timeout_s, on_timeout=self._on_timeout)
        except (InvalidRequest, NoPeerAvailable) as exc:
            logger.info("screenshot request not dispatched: %s", exc)
            return _failure(exc)

        request_id = entry.request_id
        logger.info("screenshot requested (request_id=%s)", request_id)
        try:
            resolution = await entry.wait()
        finally:
            # No-op once settled; removes the entry if this task was cancelled.
            self._dispatcher.forget(request_id)

        if resolution.status == "timed_out":
            return _failure(RequestTimeout(request_id=request_id, timeout_s=entry.timeout_s), request_id)

        try:
            path = await self._persist(request_id, resolution.payload, options.get(CAPTURE_OPTION_FILENAME))
        except (CaptureFailed, StorageFailure) as exc:
            logger.warning("screenshot request %s failed: %s", request_id, exc)
            return _failure(exc, request_id)

        return CaptureResult(
            success=True,
            path=str(path),
            filename=path.name,
            message="AI screenshot captured successfully",
            request_id=request_id,
        )

    async def _persist(self, request_id: int, payload: Any, filename: Any) -> Path:
        if not payload:
            raise CaptureFailed(request_id=request_id, reason="peer replied without image data")
        image = decode_image_data(payload)
        suggested = filename if isinstance(filename, str) else None
        return await asyncio.to_thread(self._screenshots.save, image, suggested, prefix=CAPTURE_FILENAME_PREFIX)


__all__ = ["CaptureService"]
