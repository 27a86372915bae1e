"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from visualizer.configs.ai_checker import AiCheckerSettings
from visualizer.configs.base import ServerSettings
from visualizer.configs.editor import EditorSettings
from visualizer.configs.export import ExportSettings
from visualizer.configs.renderer import RendererSettings


class Settings(ServerSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    renderer: RendererSettings = Field(default_factory=RendererSettings)
    ai_checker: AiCheckerSettings = Field(default_factory=AiCheckerSettings)
    editor: EditorSettings = Field(default_factory=EditorSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from visualizer.configs import get_settings
        settings = get_settings()
    """
    return Settings()
