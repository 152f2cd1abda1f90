"""API routers."""

from f1countdown.api.errors import register_exception_handlers
from f1countdown.api.preferences import router as preferences_router
from f1countdown.api.races import router as races_router
from f1countdown.api.timeline import router as timeline_router

__all__ = [
    "races_router",
    "timeline_router",
    "preferences_router",
    "register_exception_handlers",
]
