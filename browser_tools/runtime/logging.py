"""Logging initialization."""

from __future__ import annotations

import os
import logging

from browser_tools.config.logging import LOG_LEVEL, LOG_FORMAT, ENV_SHOW_ACCESS_LOGS


def configure_logging(level: str | int | None = None) -> None:
    # Uvicorn logs every HTTP request; the server already logs the interesting ones.
    if (os.getenv(ENV_SHOW_ACCESS_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
    if level is not None:
        logging.getLogger().setLevel(level)


__all__ = ["configure_logging"]
