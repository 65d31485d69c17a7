"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Completion provider
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o"

    # Sampling (None = provider default)
    tag_temperature: float | None = None
    plan_temperature: float = 0.7
    plan_max_tokens: int = 2000
    refresh_temperature: float = 0.8
    refresh_max_tokens: int = 800

    # Document tagging
    tag_text_chars: int = 2000
    max_upload_bytes: int = 1024 * 1024

    # Retry (extra attempts after the first)
    completion_retry_count: int = 2
    retry_jitter_min_ms: int = 200
    retry_jitter_max_ms: int = 500

    # Logging
    log_level: str = "INFO"

    # UI
    ui_origin: str = "http://localhost:8501"
    backend_url: str = "http://localhost:8000"
    geocoder_url: str = "https://nominatim.openstreetmap.org/search"
    geocoder_user_agent: str = "ai-utilities/0.1 (wedding planner location search)"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
