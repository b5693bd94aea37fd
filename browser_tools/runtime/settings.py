"""Environment parsing for runtime settings."""

from __future__ import annotations

import os
import math
from pathlib import Path

from browser_tools.config.server import ENV_HOST, ENV_PORT, DEFAULT_HOST, DEFAULT_PORT
from browser_tools.config.logs import (
    ENV_LOG_BUFFER_MAX,
    ENV_LOG_BUFFER_TRIM_TO,
    DEFAULT_LOG_BUFFER_MAX,
    DEFAULT_LOG_BUFFER_TRIM_TO,
)
from browser_tools.config.capture import (
    ENV_SCREENSHOT_DIR,
    DEFAULT_SCREENSHOT_DIR,
    ENV_SCREENSHOT_TIMEOUT_S,
    DEFAULT_SCREENSHOT_TIMEOUT_S,
)
from browser_tools.config.websocket import (
    ENV_WS_IDLE_TIMEOUT_S,
    ENV_WS_WATCHDOG_TICK_S,
    DEFAULT_WS_IDLE_TIMEOUT_S,
    DEFAULT_WS_WATCHDOG_TICK_S,
)
from browser_tools.state.settings import (
    AppSettings,
    ServerSettings,
    CaptureSettings,
    LogBufferSettings,
    WebSocketSettings,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except Exception:
        return default
    return value if math.isfinite(value) else default


def _load_server_settings() -> ServerSettings:
    port = _int_env(ENV_PORT, DEFAULT_PORT)
    if port <= 0 or port > 65535:
        port = DEFAULT_PORT
    return ServerSettings(host=_str_env(ENV_HOST, DEFAULT_HOST), port=port)


def _load_capture_settings() -> CaptureSettings:
    dir_raw = os.getenv(ENV_SCREENSHOT_DIR)
    screenshot_dir = Path(dir_raw).expanduser() if dir_raw and dir_raw.strip() else DEFAULT_SCREENSHOT_DIR

    timeout_s = _float_env(ENV_SCREENSHOT_TIMEOUT_S, DEFAULT_SCREENSHOT_TIMEOUT_S)
    if timeout_s <= 0:
        timeout_s = DEFAULT_SCREENSHOT_TIMEOUT_S

    return CaptureSettings(screenshot_dir=screenshot_dir, timeout_s=timeout_s)


def _load_log_buffer_settings() -> LogBufferSettings:
    max_entries = _int_env(ENV_LOG_BUFFER_MAX, DEFAULT_LOG_BUFFER_MAX)
    trim_to = _int_env(ENV_LOG_BUFFER_TRIM_TO, DEFAULT_LOG_BUFFER_TRIM_TO)
    if max_entries > 0 and (trim_to <= 0 or trim_to > max_entries):
        trim_to = max(1, max_entries // 2)
    return LogBufferSettings(max_entries=max_entries, trim_to=trim_to)


def _load_websocket_settings() -> WebSocketSettings:
    idle_timeout = _float_env(ENV_WS_IDLE_TIMEOUT_S, DEFAULT_WS_IDLE_TIMEOUT_S)
    watchdog_tick = _float_env(ENV_WS_WATCHDOG_TICK_S, DEFAULT_WS_WATCHDOG_TICK_S)
    if watchdog_tick <= 0:
        watchdog_tick = DEFAULT_WS_WATCHDOG_TICK_S
    return WebSocketSettings(idle_timeout_s=idle_timeout, watchdog_tick_s=watchdog_tick)


def load_settings() -> AppSettings:
    return AppSettings(
        server=_load_server_settings(),
        capture=_load_capture_settings(),
        logs=_load_log_buffer_settings(),
        websocket=_load_websocket_settings(),
    )


__all__ = ["load_settings"]
