"""Screenshot capture and storage configuration."""

from __future__ import annotations

from pathlib import Path

ENV_SCREENSHOT_DIR = "SCREENSHOT_DIR"
ENV_SCREENSHOT_TIMEOUT_S = "SCREENSHOT_TIMEOUT_S"

DEFAULT_SCREENSHOT_DIR: Path = Path("screenshots")
DEFAULT_SCREENSHOT_TIMEOUT_S: float = 10.0
# Upper bound for a per-call timeout override.
MAX_SCREENSHOT_TIMEOUT_S: float = 300.0

# Filename prefixes, followed by a filesystem-safe ISO timestamp.
CAPTURE_FILENAME_PREFIX = "ai-screenshot"
EXTENSION_FILENAME_PREFIX = "extension-screenshot"
UPLOAD_FILENAME_PREFIX = "screenshot"

SCREENSHOT_SUFFIX = ".png"

# Caller option naming the file a capture is saved under.
CAPTURE_OPTION_FILENAME = "filename"

__all__ = [
    "ENV_SCREENSHOT_DIR",
    "ENV_SCREENSHOT_TIMEOUT_S",
    "DEFAULT_SCREENSHOT_DIR",
    "DEFAULT_SCREENSHOT_TIMEOUT_S",
    "MAX_SCREENSHOT_TIMEOUT_S",
    "CAPTURE_FILENAME_PREFIX",
    "EXTENSION_FILENAME_PREFIX",
    "UPLOAD_FILENAME_PREFIX",
    "SCREENSHOT_SUFFIX",
    "CAPTURE_OPTION_FILENAME",
]
