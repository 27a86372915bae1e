"""
PNG export configuration settings.

Dependencies: pydantic_settings
System role: Export encoder configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExportSettings(BaseSettings):
    """Raster export configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    margin: int = Field(
        default=20,
        ge=0,
        description="Padding added on every side of the exported image",
    )
    background: str = Field(
        default="#FAFAFA",
        description="Background fill of the exported image",
    )
    filename: str = Field(
        default="mermaid-diagram.png",
        description="File name offered to the client on download",
    )
