"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Items Service"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_path: str = "./data/items.db"

    # Authentication
    jwt_secret_key: SecretStr  # Required: the service cannot start without it
    jwt_algorithm: str = "HS256"
    jwt_expire_seconds: int = 3600
    bcrypt_rounds: int = 12

    # Logging
    log_json: bool = True
    log_level: str = "INFO"

    # Tracing
    tracing_enabled: bool = False
    otlp_endpoint: str | None = None  # e.g. "http://localhost:4318"
    tracing_console_export: bool = False
    tracing_sample_rate: float = 1.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
