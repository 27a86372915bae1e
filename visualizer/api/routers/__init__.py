"""API routers."""

from .diagrams import router as diagrams_router
from .editor import router as editor_router
from .editor_stream import router as editor_stream_router
from .health import router as health_router

__all__ = [
    "diagrams_router",
    "editor_router",
    "editor_stream_router",
    "health_router",
]
