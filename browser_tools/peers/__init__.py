from .registry import PeerRegistry

__all__ = ["PeerRegistry"]
