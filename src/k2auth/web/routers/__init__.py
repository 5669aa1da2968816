from k2auth.web.routers.device import router as device_router
from k2auth.web.routers.sessions import router as sessions_router

__all__ = [
    "device_router",
    "sessions_router",
]
