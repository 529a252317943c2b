"""Package configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Data-access settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "mool_db"
    server_selection_timeout_ms: int = 30000

    # Startup
    connect_retry_delay: float = 1.0  # Seconds between connection attempts
    connect_max_attempts: int = 0  # 0 = retry forever


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
