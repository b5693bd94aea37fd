from .peer import PeerConnection
from .runtime import RuntimeDeps
from .result import CaptureResult
from .browser import BrowserState
from .settings import AppSettings
from .messages import PeerMessage, CommandRequest
from .correlation import Resolution, PendingCorrelation

__all__ = [
    "AppSettings",
    "BrowserState",
    "CaptureResult",
    "CommandRequest",
    "PeerConnection",
    "PeerMessage",
    "PendingCorrelation",
    "Resolution",
    "RuntimeDeps",
]
