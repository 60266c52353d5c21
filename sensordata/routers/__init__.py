from .readings import router as readings_router
from .devices import router as devices_router
from .health import router as health_router

__all__ = [
    "readings_router",
    "devices_router",
    "health_router"
]
