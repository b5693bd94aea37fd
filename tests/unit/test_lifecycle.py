from __future__ import annotations

import asyncio

import pytest

from browser_tools.handlers.websocket.lifecycle import PeerLifecycle
from browser_tools.config.websocket import WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON
from tests.utils import FakeSocket


@pytest.mark.asyncio
async def test_silent_peer_is_closed_with_idle_code() -> None:
    ws = FakeSocket()
    lifecycle = PeerLifecycle(ws, idle_timeout_s=0.05)
    assert lifecycle.start() is not None

    await asyncio.wait_for(ws.closed.wait(), timeout=1.0)
    assert ws.close_code == WS_CLOSE_IDLE_CODE
    assert ws.close_reason == WS_CLOSE_IDLE_REASON
    assert lifecycle.expired()

    await lifecycle.stop()


@pytest.mark.asyncio
async def test_activity_pushes_the_deadline_back() -> None:
    ws = FakeSocket()
    lifecycle = PeerLifecycle(ws, idle_timeout_s=0.1)
    lifecycle.start()

    # Well past the original deadline, but never silent for a full window.
    for _ in range(10):
        await asyncio.sleep(0.02)
        lifecycle.touch()
    assert not ws.closed.is_set()
    assert not lifecycle.expired()

    await lifecycle.stop()
    await asyncio.sleep(0.15)
    assert not ws.closed.is_set()


@pytest.mark.asyncio
async def test_close_failure_is_contained() -> None:
    class _BrokenSocket(FakeSocket):
        async def close(self, *, code: int = 1000, reason: str | None = None) -> None:
            raise RuntimeError("already gone")

    lifecycle = PeerLifecycle(_BrokenSocket(), idle_timeout_s=0.01)
    lifecycle.start()
    await asyncio.sleep(0.05)

    assert lifecycle.expired()
    await lifecycle.stop()


@pytest.mark.asyncio
async def test_disabled_without_idle_timeout() -> None:
    lifecycle = PeerLifecycle(FakeSocket(), idle_timeout_s=0.0)
    assert lifecycle.start() is None
    assert not lifecycle.expired()
    await lifecycle.stop()
