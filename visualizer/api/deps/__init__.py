"""FastAPI dependency providers."""

from .dependencies import (
    get_ai_checker,
    get_engine,
    get_export_encoder,
    get_renderer,
    get_service_cache,
    get_session_registry,
    get_settings_dependency,
    get_validation_coordinator,
)

__all__ = [
    "get_ai_checker",
    "get_engine",
    "get_export_encoder",
    "get_renderer",
    "get_service_cache",
    "get_session_registry",
    "get_settings_dependency",
    "get_validation_coordinator",
]
