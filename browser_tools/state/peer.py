"""Connected peer channel (dataclasses only)."""

from __future__ import annotations

import time
import secrets
from typing import Any
from dataclasses import field, dataclass


def _new_peer_id() -> str:
    return secrets.token_hex(8)


@dataclass(slots=True, eq=False)
class PeerConnection:
    ws: Any
    peer_id: str = field(default_factory=_new_peer_id)
    open: bool = True
    connected_at: float = field(default_factory=time.monotonic)


__all__ = ["PeerConnection"]
