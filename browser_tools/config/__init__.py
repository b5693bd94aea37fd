"""Configuration module exports (env names, defaults and protocol constants only)."""

from .server import DEFAULT_PORT, DEFAULT_HOST
from .capture import DEFAULT_SCREENSHOT_DIR, DEFAULT_SCREENSHOT_TIMEOUT_S

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_SCREENSHOT_DIR",
    "DEFAULT_SCREENSHOT_TIMEOUT_S",
]
