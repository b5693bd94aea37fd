"""Peer WebSocket protocol configuration and constants."""

from __future__ import annotations

WS_ENDPOINT_PATH = "/extension-ws"

# Message keys (extension wire format)
WS_KEY_TYPE = "type"
WS_KEY_REQUEST_ID = "requestId"
WS_KEY_TIMESTAMP = "timestamp"
WS_KEY_DATA = "data"
WS_KEY_URL = "url"
WS_KEY_TAB_ID = "tabId"

# Message types
MSG_TAKE_SCREENSHOT = "take-screenshot"
MSG_SCREENSHOT_DATA = "screenshot-data"
MSG_HEARTBEAT = "heartbeat"
MSG_HEARTBEAT_RESPONSE = "heartbeat-response"
MSG_PAGE_NAVIGATED = "page-navigated"

# Keys the server owns in an outbound command; caller options never override them.
WS_RESERVED_COMMAND_KEYS = frozenset({WS_KEY_TYPE, WS_KEY_REQUEST_ID, WS_KEY_TIMESTAMP})

# Close codes
WS_CLOSE_IDLE_CODE = 4000
WS_CLOSE_IDLE_REASON = "idle timeout"

# Idle watchdog. Extensions heartbeat well inside this window.
ENV_WS_IDLE_TIMEOUT_S = "WS_IDLE_TIMEOUT_S"
ENV_WS_WATCHDOG_TICK_S = "WS_WATCHDOG_TICK_S"
DEFAULT_WS_IDLE_TIMEOUT_S = 120.0
DEFAULT_WS_WATCHDOG_TICK_S = 5.0

__all__ = [
    "WS_ENDPOINT_PATH",
    "WS_KEY_TYPE",
    "WS_KEY_REQUEST_ID",
    "WS_KEY_TIMESTAMP",
    "WS_KEY_DATA",
    "WS_KEY_URL",
    "WS_KEY_TAB_ID",
    "MSG_TAKE_SCREENSHOT",
    "MSG_SCREENSHOT_DATA",
    "MSG_HEARTBEAT",
    "MSG_HEARTBEAT_RESPONSE",
    "MSG_PAGE_NAVIGATED",
    "WS_RESERVED_COMMAND_KEYS",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "ENV_WS_IDLE_TIMEOUT_S",
    "ENV_WS_WATCHDOG_TICK_S",
    "DEFAULT_WS_IDLE_TIMEOUT_S",
    "DEFAULT_WS_WATCHDOG_TICK_S",
]
