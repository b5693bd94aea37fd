from .images import make_png, png_data_url
from .options import deeply_nested
from .peers import FakeSocket, ReplyingSocket, attach_peer
from .settings import make_settings

__all__ = [
    "FakeSocket",
    "ReplyingSocket",
    "attach_peer",
    "deeply_nested",
    "make_png",
    "make_settings",
    "png_data_url",
]
