from .logs import router as logs_router
from .status import router as status_router
from .screenshots import router as screenshots_router

__all__ = ["logs_router", "screenshots_router", "status_router"]
