from .buffer import LogBuffer

__all__ = ["LogBuffer"]
