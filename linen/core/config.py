"""
Application configuration using Pydantic Settings.

Centralizes all configuration with environment variable support.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/linen.db"

    # Calendar boundaries are computed in this civil timezone, not the host's
    calendar_timezone: str = "America/Los_Angeles"

    # Generative text
    llm_model: str = "gpt-4o-mini"
    llm_max_tokens: int = 1500
    llm_temperature: float = 0.7
    llm_timeout_seconds: float = 60.0

    # Identity
    admin_api_secret: str = ""
    guest_token_prefix: str = "guest-token-"
    guest_user_id: str = "guest-user"
    guest_user_name: str = "Guest User"
    guest_user_email: str = "guest@linen.app"

    # Seed the rotation table during startup when empty
    auto_seed_themes: bool = False

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:8081,http://localhost:19006"

    # API Keys (optional, loaded from env and handed to litellm)
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    def cors_origin_list(self) -> List[str]:
        """Split the comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
