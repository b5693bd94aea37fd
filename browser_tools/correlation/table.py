"""Correlation table: request id -> pending reply slot plus timeout alarm."""

from __future__ import annotations

import math
import asyncio
import logging
from typing import Any
from collections.abc import Callable

from browser_tools.state.correlation import Resolution, PendingCorrelation

logger = logging.getLogger(__name__)

TimeoutCallback = Callable[[int], None]


class CorrelationTable:
    """Track in-flight commands until a reply or their timeout, whichever is first.

    Each entry owns a one-shot ``loop.call_later`` alarm. Whatever settles an
    entry first (``resolve`` or the alarm) removes it from the table and
    cancels the alarm, so a late reply or a stale timer finds nothing and is
    a no-op. Single resolution is enforced here rather than by callers.
    """

    def __init__(self) -> None:
        self._entries: dict[int, PendingCorrelation] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, request_id: object) -> bool:
        return request_id in self._entries

    def create(
        self,
        request_id: int,
        on_timeout: TimeoutCallback | None,
        timeout_s: float,
    ) -> PendingCorrelation:
        if request_id in self._entries:
            raise ValueError(f"request id {request_id} is already pending")
        # Every entry must expire; an infinite alarm would pin it forever.
        if not math.isfinite(timeout_s):
            raise ValueError(f"timeout must be finite, got {timeout_s!r}")

        loop = asyncio.get_running_loop()
        entry = PendingCorrelation(
            request_id=request_id,
            future=loop.create_future(),
            timeout_s=float(timeout_s),
        )
        entry.timer = loop.call_later(max(0.0, float(timeout_s)), self._expire, entry, on_timeout)
        self._entries[request_id] = entry
        return entry

    def resolve(self, request_id: int, payload: Any) -> bool:
        entry = self._entries.get(request_id)
        if entry is None:
            return False
        self._remove(entry)
        if entry.future.done():
            # Waiter went away (cancelled); nothing left to wake.
            return False
        entry.future.set_result(Resolution(status="fulfilled", payload=payload))
        return True

    def discard(self, request_id: int) -> bool:
        entry = self._entries.get(request_id)
        if entry is None:
            return False
        self._remove(entry)
        return True

    def close(self) -> int:
        entries = list(self._entries.values())
        for entry in entries:
            self._remove(entry)
            if not entry.future.done():
                entry.future.cancel()
        return len(entries)

    def _remove(self, entry: PendingCorrelation) -> None:
        if self._entries.get(entry.request_id) is entry:
            del self._entries[entry.request_id]
        if entry.timer is not None:
            entry.timer.cancel()
            entry.timer = None

    def _expire(self, entry: PendingCorrelation, on_timeout: TimeoutCallback | None) -> None:
        if self._entries.get(entry.request_id) is not entry:
            return
        self._remove(entry)
        if entry.future.done():
            return
        entry.future.set_result(Resolution(status="timed_out"))
        if on_timeout is None:
            return
        try:
            on_timeout(entry.request_id)
        except Exception:
            logger.exception("timeout callback failed for request %s", entry.request_id)


__all__ = ["CorrelationTable", "TimeoutCallback"]
