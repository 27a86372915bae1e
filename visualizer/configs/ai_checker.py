"""
AI error checker configuration settings.

Settings for the hosted Gemini model that flags Mermaid syntax problems.

Dependencies: pydantic_settings
System role: AI checker configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AiCheckerSettings(BaseSettings):
    """Gemini error-detection model configuration."""

    model_config = SettingsConfigDict(
        env_prefix="AI_CHECKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_API_KEY", "AI_CHECKER_GOOGLE_API_KEY"),
        description="Google API key for Gemini access",
    )
    model_id: str = Field(
        default="gemini-2.0-flash",
        description="Gemini model identifier",
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Model temperature (0.0 for deterministic)",
    )
    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout for a single error-detection call",
    )
