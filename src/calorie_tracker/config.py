"""Application configuration."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
_PLACEHOLDER_URL_MARKER = "your-project-ref"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_secret_key: str
    openai_api_key: str
    openai_model: str = "gpt-3.5-turbo"
    openai_temperature: float = 0.3
    openai_max_tokens: int = 300
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("supabase_url")
    @classmethod
    def _reject_placeholder_url(cls, value: str) -> str:
        if _PLACEHOLDER_URL_MARKER in value:
            raise ValueError(
                "SUPABASE_URL is still set to the placeholder value; use your "
                "project URL (https://[project-ref].supabase.co)"
            )
        return value
