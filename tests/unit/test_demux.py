from __future__ import annotations

import orjson
import pytest

from tests.utils import FakeSocket, attach_peer, png_data_url


def _frame(payload: dict) -> str:
    return orjson.dumps(payload).decode("utf-8")


@pytest.mark.asyncio
async def test_heartbeat_is_answered(deps) -> None:
    socket = FakeSocket()
    peer = attach_peer(deps, socket)

    msg = await deps.demux.handle(peer, _frame({"type": "heartbeat"}))

    assert msg is not None and msg.type == "heartbeat"
    assert socket.sent_json() == [{"type": "heartbeat-response"}]


@pytest.mark.asyncio
async def test_malformed_and_unknown_frames_are_dropped(deps) -> None:
    socket = FakeSocket()
    peer = attach_peer(deps, socket)

    assert await deps.demux.handle(peer, "{broken") is None
    msg = await deps.demux.handle(peer, _frame({"type": "something-new"}))

    assert msg is not None
    assert socket.sent == []
    assert deps.peers.count() == 1


@pytest.mark.asyncio
async def test_reply_for_unknown_request_leaves_table_untouched(deps) -> None:
    peer = attach_peer(deps, FakeSocket())
    deps.correlations.create(1, None, 5.0)

    await deps.demux.handle(peer, _frame({"type": "screenshot-data", "requestId": 42, "data": "abc"}))

    assert len(deps.correlations) == 1
    assert 1 in deps.correlations
    deps.correlations.close()


@pytest.mark.asyncio
async def test_reply_resolves_pending_request(deps) -> None:
    peer = attach_peer(deps, FakeSocket())
    entry = deps.correlations.create(9, None, 5.0)

    await deps.demux.handle(peer, _frame({"type": "screenshot-data", "requestId": 9, "data": "abc"}))

    resolution = await entry.wait()
    assert resolution.status == "fulfilled"
    assert resolution.payload == "abc"
    assert len(deps.correlations) == 0


@pytest.mark.asyncio
async def test_log_records_land_in_buffer(deps) -> None:
    peer = attach_peer(deps, FakeSocket())

    await deps.demux.handle(peer, _frame({"type": "console-error", "message": "boom"}))
    await deps.demux.handle(peer, _frame({"type": "network-request", "url": "https://example.com"}))

    assert deps.logs.log_count == 2
    assert deps.logs.network_count == 1
    items, total = deps.logs.entries(limit=10)
    assert total == 2
    assert items[0]["message"] == "boom"
    assert "receivedAt" in items[0]


@pytest.mark.asyncio
async def test_page_navigation_updates_browser_state(deps) -> None:
    peer = attach_peer(deps, FakeSocket())

    await deps.demux.handle(peer, _frame({"type": "page-navigated", "url": "https://example.com/a", "tabId": 3}))

    assert deps.browser.current_url == "https://example.com/a"
    assert deps.browser.tab_id == 3


@pytest.mark.asyncio
async def test_unsolicited_capture_is_saved(deps, png: bytes) -> None:
    peer = attach_peer(deps, FakeSocket())

    await deps.demux.handle(peer, _frame({"type": "screenshot-data", "data": png_data_url(png)}))

    saved = deps.screenshots.list_screenshots()
    assert len(saved) == 1
    assert saved[0]["filename"].startswith("extension-screenshot-")
    assert (deps.screenshots.directory / saved[0]["filename"]).read_bytes() == png
