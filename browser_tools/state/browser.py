"""Last known browser location reported by the extension."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(slots=True)
class BrowserState:
    current_url: str = ""
    tab_id: Any = None

    def navigate(self, url: str, tab_id: Any = None) -> None:
        self.current_url = url
        self.tab_id = tab_id


__all__ = ["BrowserState"]
