"""Per-request correlation state (dataclasses only)."""

from __future__ import annotations

import time
import asyncio
from typing import Any, Literal
from dataclasses import field, dataclass

ResolutionStatus = Literal["fulfilled", "timed_out"]


@dataclass(frozen=True, slots=True)
class Resolution:
    status: ResolutionStatus
    payload: Any = None


@dataclass(slots=True, eq=False)
class PendingCorrelation:
    """One in-flight command awaiting a reply.

    ``future`` is the single-assignment result slot; ``timer`` is the alarm that
    settles it as timed out. Both are owned by the correlation table.
    """

    request_id: int
    future: asyncio.Future[Resolution]
    timeout_s: float
    timer: asyncio.TimerHandle | None = None
    created_at: float = field(default_factory=time.monotonic)

    async def wait(self) -> Resolution:
        return await self.future


__all__ = ["PendingCorrelation", "Resolution", "ResolutionStatus"]
