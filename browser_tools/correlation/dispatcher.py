"""Command dispatcher: mint a request id, register it, broadcast the command."""

from __future__ import annotations

import math
import time
import logging
import itertools
from typing import Any
from collections.abc import Callable, Iterator

import orjson

from browser_tools.errors import InvalidRequest, NoPeerAvailable
from browser_tools.peers.registry import PeerRegistry
from browser_tools.state.messages import CommandRequest
from browser_tools.state.correlation import PendingCorrelation

from .table import CorrelationTable, TimeoutCallback

logger = logging.getLogger(__name__)

ClockMsFn = Callable[[], int]


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class CommandDispatcher:
    def __init__(
        self,
        *,
        peers: PeerRegistry,
        correlations: CorrelationTable,
        default_timeout_s: float,
        clock_ms: ClockMsFn | None = None,
    ) -> None:
        self._peers = peers
        self._correlations = correlations
        self._default_timeout_s = float(default_timeout_s)
        self._clock_ms = clock_ms or _epoch_ms
        # Ids are never reused for the lifetime of the process.
        self._ids: Iterator[int] = itertools.count(1)

    @property
    def default_timeout_s(self) -> float:
        return self._default_timeout_s

    def next_request_id(self) -> int:
        return next(self._ids)

    async def dispatch(
        self,
        options: dict[str, Any] | None = None,
        *,
        timeout_s: float | None = None,
        on_timeout: TimeoutCallback | None = None,
    ) -> PendingCorrelation:
        """Broadcast a capture command and return its pending entry.

        The entry is in the table before the first byte goes out, so a peer
        that answers immediately is always recognised. Options that cannot
        be encoded and timeouts that are not finite and positive raise
        ``InvalidRequest`` before anything is registered.
        """
        wait_s = self._default_timeout_s if timeout_s is None else float(timeout_s)
        if not math.isfinite(wait_s) or wait_s <= 0:
            raise InvalidRequest(reason=f"timeout must be a finite number of seconds > 0, got {timeout_s!r}")

        command = CommandRequest(
            request_id=self.next_request_id(),
            created_at_ms=self._clock_ms(),
            options=dict(options or {}),
        )
        try:
            wire = orjson.dumps(command.to_wire()).decode("utf-8")
        except orjson.JSONEncodeError as exc:
            raise InvalidRequest(reason=f"capture options cannot be encoded: {exc}") from exc

        entry = self._correlations.create(command.request_id, on_timeout, wait_s)
        try:
            delivered = await self._peers.broadcast(wire)
        except BaseException:
            self._correlations.discard(command.request_id)
            raise

        if delivered == 0:
            self._correlations.discard(command.request_id)
            raise NoPeerAvailable()

        logger.debug("request %s sent to %s peer(s)", command.request_id, delivered)
        return entry

    def forget(self, request_id: int) -> bool:
        """Drop a pending entry whose waiter gave up; no-op once it settled."""
        return self._correlations.discard(request_id)


__all__ = ["CommandDispatcher"]
