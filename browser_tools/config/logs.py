"""Extension log buffer configuration."""

from __future__ import annotations

ENV_LOG_BUFFER_MAX = "LOG_BUFFER_MAX"
ENV_LOG_BUFFER_TRIM_TO = "LOG_BUFFER_TRIM_TO"

# Once the buffer grows past MAX it is cut back to the newest TRIM_TO records.
DEFAULT_LOG_BUFFER_MAX = 1000
DEFAULT_LOG_BUFFER_TRIM_TO = 500

DEFAULT_LOGS_LIMIT = 100
RECENT_WINDOW = 50

LOG_TYPE_NETWORK_REQUEST = "network-request"
LOG_TYPES = frozenset({"console-log", "console-error", "console-warn", LOG_TYPE_NETWORK_REQUEST})

__all__ = [
    "ENV_LOG_BUFFER_MAX",
    "ENV_LOG_BUFFER_TRIM_TO",
    "DEFAULT_LOG_BUFFER_MAX",
    "DEFAULT_LOG_BUFFER_TRIM_TO",
    "DEFAULT_LOGS_LIMIT",
    "RECENT_WINDOW",
    "LOG_TYPE_NETWORK_REQUEST",
    "LOG_TYPES",
]
