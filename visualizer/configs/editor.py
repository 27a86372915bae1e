"""
Live editor configuration settings.

Dependencies: pydantic_settings
System role: Editor session configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EditorSettings(BaseSettings):
    """Live editor session configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EDITOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debounce_ms: int = Field(
        default=750,
        ge=0,
        description="Quiet period before edited text is validated",
    )
