"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field
from typing import Optional, List
from functools import lru_cache


class ProviderSettings(BaseSettings):
    """LLM Provider configuration."""

    gemini_api_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    default_provider: str = Field("gemini", alias="PF_DEFAULT_PROVIDER")
    default_tier: str = Field("flash", alias="PF_DEFAULT_TIER")
    base_url: Optional[str] = Field(None, alias="PF_PROVIDER_BASE_URL")
    timeout: float = Field(60.0, alias="PF_PROVIDER_TIMEOUT")

    model_config = {"env_prefix": "", "extra": "ignore"}


class LibrarySettings(BaseSettings):
    """Template library configuration."""

    storage_backend: str = Field("file", alias="PF_STORAGE_BACKEND")
    storage_path: str = Field("~/.promptforge", alias="PF_STORAGE_PATH")

    model_config = {"env_prefix": "", "extra": "ignore"}


class APISettings(BaseSettings):
    """API server configuration."""

    host: str = Field("0.0.0.0", alias="PF_API_HOST")
    port: int = Field(8000, alias="PF_API_PORT")
    debug: bool = Field(False, alias="PF_DEBUG")
    cors_origins: List[str] = Field(["*"], alias="PF_CORS_ORIGINS")

    model_config = {"env_prefix": "", "extra": "ignore"}


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", alias="PF_LOG_LEVEL")
    format: str = Field("text", alias="PF_LOG_FORMAT")

    model_config = {"env_prefix": "", "extra": "ignore"}


class Settings(BaseSettings):
    """Root configuration aggregating all settings."""

    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    library: LibrarySettings = Field(default_factory=LibrarySettings)
    api: APISettings = Field(default_factory=APISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "env_file": ".env",
        "env_nested_delimiter": "__",
        "extra": "ignore"
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
