"""Screenshot payload decoding helpers."""

from __future__ import annotations

import re
import base64
import binascii
from datetime import datetime, timezone

from browser_tools.errors import StorageFailure

_DATA_URL_HEADER = re.compile(r"^data:[\w.+-]+/[\w.+-]+;base64,", re.IGNORECASE)


def decode_image_data(data: str) -> bytes:
    """Decode a base64 image, dropping a leading ``data:<mime>;base64,`` header."""
    if not isinstance(data, str):
        raise StorageFailure(reason="image data must be a base64 string")
    body = _DATA_URL_HEADER.sub("", data.strip(), count=1)
    if not body:
        raise StorageFailure(reason="image data is empty")
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise StorageFailure(reason=f"invalid base64 image data: {exc}") from exc


def timestamp_slug(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp safe for filenames (``:`` and ``.`` become ``-``)."""
    moment = now or datetime.now(timezone.utc)
    iso = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return iso.replace(":", "-").replace(".", "-")


__all__ = ["decode_image_data", "timestamp_slug"]
