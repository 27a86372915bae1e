"""
Diagram renderer configuration settings.

Settings for the Mermaid CLI engine used to parse and render diagrams.

Dependencies: pydantic_settings
System role: Renderer engine configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RendererSettings(BaseSettings):
    """Mermaid CLI (mmdc) renderer configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RENDERER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    mmdc_path: str = Field(
        default="mmdc",
        description="Path or command name of the mermaid-cli executable",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Maximum time a single render may take",
    )
    theme: str = Field(
        default="neutral",
        description="Mermaid theme applied to every render",
    )
    security_level: str = Field(
        default="loose",
        description="Mermaid securityLevel applied to every render",
    )
