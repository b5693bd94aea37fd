"""Filesystem store for captured screenshots."""

from __future__ import annotations

import os
import logging
from typing import Any
from pathlib import Path
from datetime import datetime, timezone

from browser_tools.errors import StorageFailure
from browser_tools.config.capture import SCREENSHOT_SUFFIX, UPLOAD_FILENAME_PREFIX

from .encoding import timestamp_slug

logger = logging.getLogger(__name__)


class ScreenshotStore:
    """Write PNG payloads under a single directory.

    Suggested names only ever contribute their basename, so a caller cannot
    write outside the store.
    """

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory).expanduser().resolve()

    @property
    def directory(self) -> Path:
        return self._directory

    def ensure_directory(self) -> Path:
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageFailure(reason=f"cannot create {self._directory}: {exc}") from exc
        return self._directory

    @staticmethod
    def default_name(prefix: str) -> str:
        return f"{prefix}-{timestamp_slug()}{SCREENSHOT_SUFFIX}"

    @staticmethod
    def sanitize_name(suggested: str | None, *, prefix: str) -> str:
        name = os.path.basename(str(suggested or "").replace("\\", "/")).strip()
        if not name or name in {".", ".."}:
            return ScreenshotStore.default_name(prefix)
        if not os.path.splitext(name)[1]:
            name += SCREENSHOT_SUFFIX
        return name

    def save(self, data: bytes, suggested_name: str | None, *, prefix: str = UPLOAD_FILENAME_PREFIX) -> Path:
        return self.write(self.ensure_directory() / self.sanitize_name(suggested_name, prefix=prefix), data)

    def upload_target(self, path_hint: str | None) -> Path:
        """Resolve where a directly uploaded screenshot goes.

        An existing directory receives a generated name inside it; any other
        hint contributes only its basename inside the store.
        """
        if path_hint:
            hinted = Path(path_hint).expanduser()
            if hinted.is_dir():
                return hinted.resolve() / self.default_name(UPLOAD_FILENAME_PREFIX)
        return self.ensure_directory() / self.sanitize_name(path_hint, prefix=UPLOAD_FILENAME_PREFIX)

    def write(self, target: Path, data: bytes) -> Path:
        try:
            target.write_bytes(data)
        except OSError as exc:
            raise StorageFailure(reason=f"cannot write {target}: {exc}") from exc
        logger.info("screenshot saved: %s (%s bytes)", target, len(data))
        return target

    def list_screenshots(self) -> list[dict[str, Any]]:
        if not self._directory.is_dir():
            return []
        items: list[tuple[float, dict[str, Any]]] = []
        for entry in self._directory.iterdir():
            if entry.suffix.lower() != SCREENSHOT_SUFFIX or not entry.is_file():
                continue
            created = entry.stat().st_ctime
            items.append((
                created,
                {
                    "filename": entry.name,
                    "path": str(entry),
                    "created": datetime.fromtimestamp(created, tz=timezone.utc).isoformat(),
                },
            ))
        items.sort(key=lambda item: item[0], reverse=True)
        return [info for _, info in items]


__all__ = ["ScreenshotStore"]
