"""Public capture result (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CaptureResult:
    success: bool
    path: str | None = None
    filename: str | None = None
    error: str | None = None
    message: str | None = None
    request_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            data: dict[str, Any] = {"success": True, "path": self.path, "filename": self.filename}
        else:
            data = {"success": False, "error": self.error}
        if self.message:
            data["message"] = self.message
        if self.request_id is not None:
            data["requestId"] = self.request_id
        return data


__all__ = ["CaptureResult"]
