from .demux import ReplyDemultiplexer
from .manager import handle_peer_connection

__all__ = ["ReplyDemultiplexer", "handle_peer_connection"]
