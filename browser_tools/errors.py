"""Shared error types for the browser tools server.

Every error carries a stable ``kind`` that is surfaced verbatim in the public
capture result, so HTTP callers can branch on it without parsing messages.
"""

from __future__ import annotations

from typing import ClassVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NoPeerAvailable(Exception):
    """Raised when a capture is requested while no extension is connected."""

    kind: ClassVar[str] = "NoPeerAvailable"

    message: str = "No Chrome extension connected"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class RequestTimeout(Exception):
    """Raised when no matching reply arrived within the capture window."""

    kind: ClassVar[str] = "RequestTimeout"

    request_id: int
    timeout_s: float

    def __str__(self) -> str:
        return f"Screenshot request {self.request_id} timed out after {self.timeout_s:g}s"


@dataclass(frozen=True, slots=True)
class InvalidRequest(Exception):
    """Raised when capture options or the timeout cannot form a valid command."""

    kind: ClassVar[str] = "InvalidRequest"

    reason: str

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True, slots=True)
class MalformedPeerMessage(Exception):
    """Raised by the peer message parser; never reaches a waiting caller."""

    kind: ClassVar[str] = "MalformedPeerMessage"

    reason: str

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True, slots=True)
class StorageFailure(Exception):
    """Raised when a screenshot payload cannot be decoded or written."""

    kind: ClassVar[str] = "StorageFailure"

    reason: str

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True, slots=True)
class CaptureFailed(Exception):
    """Raised when a peer answered a capture without any image data."""

    kind: ClassVar[str] = "CaptureFailed"

    request_id: int
    reason: str

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True, slots=True)
class TransportError(Exception):
    """Raised when sending to a single peer channel fails."""

    kind: ClassVar[str] = "TransportError"

    peer_id: str
    reason: str

    def __str__(self) -> str:
        return f"peer {self.peer_id}: {self.reason}"


def describe_error(exc: Exception) -> str:
    """Return the public ``error`` string for a failed capture."""
    kind = getattr(exc, "kind", None) or type(exc).__name__
    if isinstance(exc, (NoPeerAvailable, RequestTimeout, InvalidRequest)):
        return kind
    detail = str(exc)
    return f"{kind}: {detail}" if detail else kind


__all__ = [
    "CaptureFailed",
    "InvalidRequest",
    "MalformedPeerMessage",
    "NoPeerAvailable",
    "RequestTimeout",
    "StorageFailure",
    "TransportError",
    "describe_error",
]
