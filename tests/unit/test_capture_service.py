from __future__ import annotations

import time
import asyncio
from pathlib import Path

import pytest

from browser_tools.runtime.dependencies import build_runtime_deps
from tests.utils import (
    FakeSocket,
    ReplyingSocket,
    attach_peer,
    make_png,
    deeply_nested,
    make_settings,
    png_data_url,
)


def _answer_with(image: bytes):
    def reply(command: dict) -> dict:
        return {"type": "screenshot-data", "requestId": command["requestId"], "data": png_data_url(image)}

    return reply


@pytest.mark.asyncio
async def test_capture_without_peers_fails_fast(deps) -> None:
    result = await deps.capture.capture()

    assert result.success is False
    assert result.error == "NoPeerAvailable"
    assert len(deps.correlations) == 0


@pytest.mark.asyncio
async def test_capture_round_trip_saves_image(deps, png: bytes) -> None:
    socket = ReplyingSocket(deps, _answer_with(png))
    attach_peer(deps, socket)

    result = await deps.capture.capture({"filename": "page.png"})

    assert result.success is True, result
    assert result.filename == "page.png"
    assert Path(result.path).read_bytes() == png
    assert result.to_dict()["requestId"] == socket.commands()[0]["requestId"]
    assert len(deps.correlations) == 0


@pytest.mark.asyncio
async def test_capture_filename_cannot_escape_directory(deps, png: bytes) -> None:
    attach_peer(deps, ReplyingSocket(deps, _answer_with(png)))

    result = await deps.capture.capture({"filename": "../../etc/evil"})

    assert result.success is True
    assert Path(result.path).parent == deps.screenshots.directory
    assert result.filename == "evil.png"


@pytest.mark.asyncio
async def test_capture_default_name_uses_capture_prefix(deps, png: bytes) -> None:
    attach_peer(deps, ReplyingSocket(deps, _answer_with(png)))

    result = await deps.capture.capture()

    assert result.success is True
    assert result.filename.startswith("ai-screenshot-")
    assert result.filename.endswith(".png")


@pytest.mark.asyncio
async def test_capture_times_out_and_drops_late_reply(tmp_path: Path) -> None:
    deps = build_runtime_deps(make_settings(tmp_path, timeout_s=0.05))
    socket = FakeSocket()
    peer = attach_peer(deps, socket)

    started = time.monotonic()
    result = await deps.capture.capture()
    elapsed = time.monotonic() - started

    assert result.success is False
    assert result.error == "RequestTimeout"
    assert 0.04 <= elapsed < 1.0
    assert len(deps.correlations) == 0

    request_id = socket.commands()[0]["requestId"]
    late = '{"type":"screenshot-data","requestId":%d,"data":"%s"}' % (request_id, png_data_url(make_png()))
    await deps.demux.handle(peer, late)
    assert len(deps.correlations) == 0
    assert deps.screenshots.list_screenshots() == []


@pytest.mark.asyncio
async def test_per_call_timeout_overrides_default(deps) -> None:
    attach_peer(deps, FakeSocket())

    result = await asyncio.wait_for(deps.capture.capture(timeout_s=0.05), timeout=1.0)

    assert result.error == "RequestTimeout"


@pytest.mark.asyncio
async def test_out_of_order_replies_reach_their_own_callers(deps) -> None:
    image_a = make_png(rgb=(255, 0, 0))
    image_b = make_png(rgb=(0, 0, 255))
    socket = FakeSocket()
    peer = attach_peer(deps, socket)

    task_a = asyncio.create_task(deps.capture.capture({"filename": "a.png"}))
    await asyncio.sleep(0)
    task_b = asyncio.create_task(deps.capture.capture({"filename": "b.png"}))
    while len(socket.commands()) < 2:
        await asyncio.sleep(0.001)

    by_name = {c["filename"]: c["requestId"] for c in socket.commands()}
    assert by_name["a.png"] != by_name["b.png"]

    # B answers first.
    for name, image in (("b.png", image_b), ("a.png", image_a)):
        frame = '{"type":"screenshot-data","requestId":%d,"data":"%s"}' % (by_name[name], png_data_url(image))
        await deps.demux.handle(peer, frame)

    result_a, result_b = await asyncio.gather(task_a, task_b)
    assert Path(result_a.path).read_bytes() == image_a
    assert Path(result_b.path).read_bytes() == image_b
    assert len(deps.correlations) == 0


@pytest.mark.asyncio
async def test_first_reply_wins_across_peers(deps) -> None:
    first = make_png(rgb=(1, 2, 3))
    second = make_png(rgb=(9, 9, 9))
    fast = ReplyingSocket(deps, _answer_with(first), delay_s=0.0)
    slow = ReplyingSocket(deps, _answer_with(second), delay_s=0.05)
    attach_peer(deps, fast)
    attach_peer(deps, slow)

    result = await deps.capture.capture({"filename": "race.png"})
    await asyncio.gather(*fast.tasks, *slow.tasks)

    assert result.success is True
    assert Path(result.path).read_bytes() == first
    assert len(deps.correlations) == 0


@pytest.mark.asyncio
async def test_reply_without_data_is_a_capture_failure(deps) -> None:
    attach_peer(deps, ReplyingSocket(deps, lambda c: {"type": "screenshot-data", "requestId": c["requestId"]}))

    result = await deps.capture.capture()

    assert result.success is False
    assert result.error.startswith("CaptureFailed")


@pytest.mark.asyncio
async def test_undecodable_reply_is_a_storage_failure(deps) -> None:
    reply = {"type": "screenshot-data", "data": "data:image/png;base64,***not-base64***"}
    attach_peer(deps, ReplyingSocket(deps, lambda c: {**reply, "requestId": c["requestId"]}))

    result = await deps.capture.capture()

    assert result.success is False
    assert result.error.startswith("StorageFailure")
    assert deps.screenshots.list_screenshots() == []


@pytest.mark.asyncio
async def test_peer_disconnect_mid_wait_times_out(tmp_path: Path) -> None:
    deps = build_runtime_deps(make_settings(tmp_path, timeout_s=0.05))
    socket = FakeSocket()
    peer = attach_peer(deps, socket)

    task = asyncio.create_task(deps.capture.capture())
    while not socket.commands():
        await asyncio.sleep(0.001)
    deps.peers.unregister(peer)
    assert deps.peers.count() == 0

    # A new capture right after the last peer left fails fast.
    second = await deps.capture.capture()
    assert second.error == "NoPeerAvailable"
    assert len(deps.correlations) == 1

    result = await task
    assert result.error == "RequestTimeout"
    assert len(deps.correlations) == 0


@pytest.mark.asyncio
async def test_cancelled_caller_leaves_no_entry(deps) -> None:
    socket = FakeSocket()
    attach_peer(deps, socket)

    task = asyncio.create_task(deps.capture.capture())
    while not socket.commands():
        await asyncio.sleep(0.001)
    assert len(deps.correlations) == 1

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert len(deps.correlations) == 0


@pytest.mark.asyncio
async def test_all_sends_failing_reports_no_peer(deps) -> None:
    attach_peer(deps, FakeSocket(fail=True))

    result = await deps.capture.capture()

    assert result.error == "NoPeerAvailable"
    assert deps.peers.count() == 0
    assert len(deps.correlations) == 0


@pytest.mark.asyncio
async def test_unencodable_options_return_invalid_request(deps) -> None:
    socket = FakeSocket()
    attach_peer(deps, socket)

    result = await deps.capture.capture(deeply_nested(), timeout_s=0.05)

    assert result.success is False
    assert result.error == "InvalidRequest"
    assert "encoded" in result.message
    assert socket.sent == []
    assert len(deps.correlations) == 0


@pytest.mark.asyncio
async def test_infinite_timeout_returns_invalid_request(deps) -> None:
    socket = FakeSocket()
    attach_peer(deps, socket)

    result = await deps.capture.capture(timeout_s=float("inf"))

    assert result.error == "InvalidRequest"
    assert socket.sent == []
    assert len(deps.correlations) == 0
