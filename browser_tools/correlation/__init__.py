from .table import CorrelationTable
from .facade import CaptureService
from .dispatcher import CommandDispatcher

__all__ = ["CaptureService", "CommandDispatcher", "CorrelationTable"]
