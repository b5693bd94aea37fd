"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    port: int


@dataclass(frozen=True, slots=True)
class CaptureSettings:
    screenshot_dir: Path
    timeout_s: float


@dataclass(frozen=True, slots=True)
class LogBufferSettings:
    max_entries: int
    trim_to: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    idle_timeout_s: float
    watchdog_tick_s: float


@dataclass(frozen=True, slots=True)
class AppSettings:
    server: ServerSettings
    capture: CaptureSettings
    logs: LogBufferSettings
    websocket: WebSocketSettings


__all__ = [
    "AppSettings",
    "CaptureSettings",
    "LogBufferSettings",
    "ServerSettings",
    "WebSocketSettings",
]
