from .encoding import timestamp_slug, decode_image_data
from .screenshots import ScreenshotStore

__all__ = ["ScreenshotStore", "decode_image_data", "timestamp_slug"]
