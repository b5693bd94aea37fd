"""Bounded in-memory buffer for extension console and network records."""

from __future__ import annotations

import time
from typing import Any
from collections.abc import Callable
from datetime import datetime, timezone

from browser_tools.config.logs import LOG_TYPE_NETWORK_REQUEST

TimeFn = Callable[[], float]


def _trim(records: list[dict[str, Any]], max_entries: int, trim_to: int) -> list[dict[str, Any]]:
    if max_entries <= 0 or len(records) <= max_entries:
        return records
    keep = min(trim_to, max_entries)
    return records[-keep:] if keep > 0 else []


class LogBuffer:
    """Append-only record list cut back to the newest ``trim_to`` once over the cap.

    Trimming is disabled if max_entries <= 0.
    """

    def __init__(self, *, max_entries: int, trim_to: int, now_fn: TimeFn | None = None) -> None:
        self.max_entries = max(0, int(max_entries))
        self.trim_to = max(0, int(trim_to))
        self._now = now_fn or time.time
        self._logs: list[dict[str, Any]] = []
        self._network: list[dict[str, Any]] = []

    @property
    def log_count(self) -> int:
        return len(self._logs)

    @property
    def network_count(self) -> int:
        return len(self._network)

    def append(self, record: dict[str, Any]) -> int:
        now = self._now()
        stamped = dict(record)
        stamped["timestamp"] = datetime.fromtimestamp(now, tz=timezone.utc).isoformat()
        stamped["receivedAt"] = int(now * 1000)

        self._logs.append(stamped)
        if stamped.get("type") == LOG_TYPE_NETWORK_REQUEST:
            self._network.append(stamped)

        self._logs = _trim(self._logs, self.max_entries, self.trim_to)
        self._network = _trim(self._network, self.max_entries, self.trim_to)
        return len(self._logs)

    def entries(self, *, limit: int, log_type: str | None = None) -> tuple[list[dict[str, Any]], int]:
        """Return the newest ``limit`` records (optionally of one type) and the filtered total."""
        records = self._logs if not log_type else [r for r in self._logs if r.get("type") == log_type]
        if limit <= 0:
            return [], len(records)
        return records[-limit:], len(records)

    def recent(self, n: int) -> list[dict[str, Any]]:
        return self._logs[-n:] if n > 0 else []

    def recent_network(self, n: int) -> list[dict[str, Any]]:
        return self._network[-n:] if n > 0 else []

    def wipe(self) -> None:
        self._logs = []
        self._network = []


__all__ = ["LogBuffer"]
