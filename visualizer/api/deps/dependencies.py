"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: visualizer.configs, visualizer.application, visualizer.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends

from visualizer.application.services import (
    EditorSessionRegistry,
    ExportEncoder,
    ValidationCoordinator,
)
from visualizer.boundary.renderer import (
    EngineConfig,
    MermaidCliEngine,
    RendererAdapter,
    configure_engine,
)
from visualizer.configs import Settings, get_settings
from visualizer.core.agentic_system.error_detection_agent import MermaidErrorAgent


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._engine = None
        self._renderer = None
        self._ai_checker = None
        self._export_encoder = None
        self._session_registry = None

    @property
    def engine(self) -> MermaidCliEngine:
        """Get cached diagram engine (configured once per process)."""
        if self._engine is None:
            settings = get_settings()
            config = configure_engine(
                EngineConfig(
                    theme=settings.renderer.theme,
                    security_level=settings.renderer.security_level,
                )
            )
            self._engine = MermaidCliEngine(
                config=config,
                mmdc_path=settings.renderer.mmdc_path,
                timeout_seconds=settings.renderer.timeout_seconds,
            )
        return self._engine

    @property
    def renderer(self) -> RendererAdapter:
        """Get cached renderer adapter."""
        if self._renderer is None:
            self._renderer = RendererAdapter(self.engine)
        return self._renderer

    @property
    def ai_checker(self) -> MermaidErrorAgent:
        """Get cached AI error checker."""
        if self._ai_checker is None:
            settings = get_settings()
            self._ai_checker = MermaidErrorAgent(
                google_api_key=settings.ai_checker.google_api_key,
                model_id=settings.ai_checker.model_id,
                temperature=settings.ai_checker.temperature,
                timeout_seconds=settings.ai_checker.timeout_seconds,
            )
        return self._ai_checker

    @property
    def export_encoder(self) -> ExportEncoder:
        """Get cached PNG export encoder."""
        if self._export_encoder is None:
            settings = get_settings()
            self._export_encoder = ExportEncoder(
                margin=settings.export.margin,
                background=settings.export.background,
                filename=settings.export.filename,
            )
        return self._export_encoder

    @property
    def session_registry(self) -> EditorSessionRegistry:
        """Get registry of open editor sessions."""
        if self._session_registry is None:
            self._session_registry = EditorSessionRegistry()
        return self._session_registry

    def clear(self) -> None:
        """Close open sessions and clear all cached instances."""
        if self._session_registry is not None:
            self._session_registry.close_all()
        self._engine = None
        self._renderer = None
        self._ai_checker = None
        self._export_encoder = None
        self._session_registry = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_engine() -> MermaidCliEngine:
    """
    Get the shared diagram engine.

    Returns:
        MermaidCliEngine: Engine configured once per process
    """
    return get_service_cache().engine


def get_renderer() -> RendererAdapter:
    """
    Get renderer adapter.

    Returns:
        RendererAdapter: Adapter over the shared Mermaid CLI engine
    """
    return get_service_cache().renderer


def get_ai_checker() -> MermaidErrorAgent:
    """
    Get AI error checker.

    Returns:
        MermaidErrorAgent: Gemini-backed error detection agent
    """
    return get_service_cache().ai_checker


def get_export_encoder() -> ExportEncoder:
    """
    Get PNG export encoder.

    Returns:
        ExportEncoder: Encoder configured from export settings
    """
    return get_service_cache().export_encoder


def get_session_registry() -> EditorSessionRegistry:
    """
    Get registry of open editor sessions.

    Returns:
        EditorSessionRegistry: Shared registry
    """
    return get_service_cache().session_registry


def get_validation_coordinator(
    renderer: RendererAdapter = Depends(get_renderer),
    ai_checker: MermaidErrorAgent = Depends(get_ai_checker),
) -> ValidationCoordinator:
    """
    Get a coordinator for one-shot checks.

    Args:
        renderer: Renderer adapter (injected via Depends)
        ai_checker: AI checker (injected via Depends)

    Returns:
        ValidationCoordinator: Coordinator without a publish target
    """
    return ValidationCoordinator(renderer=renderer, ai_checker=ai_checker)
