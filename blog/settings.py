"""Application settings via Pydantic Settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Redis Blog"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Redis
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        validation_alias=AliasChoices("REDIS_URL", "BLOG_REDIS_URL"),
    )
    redis_max_connections: int | None = Field(
        default=None,
        ge=1,
        description="Connection pool cap; unbounded when unset",
    )
    redis_socket_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Per-command socket timeout in seconds; redis-py default when unset",
    )
    redis_socket_connect_timeout: float | None = Field(
        default=None,
        gt=0,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
