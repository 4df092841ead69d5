"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./itinerary_budget.db"
    database_echo: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Share links
    share_token_bytes: int = 16
    share_token_max_attempts: int = 5

    # Cloning
    template_name_prefix: str = "[Template] "
    copy_name_suffix: str = " (Copy)"

    # Expenses (stored, never converted)
    default_currency: str = "USD"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
