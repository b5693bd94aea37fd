from __future__ import annotations

from pathlib import Path

from browser_tools.state.settings import (
    AppSettings,
    ServerSettings,
    CaptureSettings,
    LogBufferSettings,
    WebSocketSettings,
)


def make_settings(
    tmp_path: Path,
    *,
    timeout_s: float = 1.0,
    max_logs: int = 1000,
    trim_to: int = 500,
    idle_timeout_s: float = 0.0,
    watchdog_tick_s: float = 0.05,
) -> AppSettings:
    return AppSettings(
        server=ServerSettings(host="127.0.0.1", port=3025),
        capture=CaptureSettings(screenshot_dir=tmp_path / "screenshots", timeout_s=timeout_s),
        logs=LogBufferSettings(max_entries=max_logs, trim_to=trim_to),
        websocket=WebSocketSettings(idle_timeout_s=idle_timeout_s, watchdog_tick_s=watchdog_tick_s),
    )


__all__ = ["make_settings"]
