"""
Configuration settings for the retry layer.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.

The retry defaults here are only consulted through ``Backoff.from_settings``
and explicit caller wiring; ``retry()`` itself always defaults to a constant
1 second backoff and a single attempt.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Retry Layer"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches logs to JSON

    # === Retry & Backoff ===
    RETRY_MAX_ATTEMPTS: int = 1
    RETRY_BACKOFF_KIND: str = "constant"  # constant | linear | quadratic | exponential
    RETRY_BASE_DELAY_SECONDS: float = 1.0
    RETRY_MAX_DELAY_SECONDS: float = 60.0  # Ceiling for non-constant strategies

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
