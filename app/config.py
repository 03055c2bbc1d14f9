"""
Application configuration using pydantic-settings.
Loads from environment variables / .env file.

Settings are built once per process by get_settings() and handed to the
payment services explicitly, never read from module globals inside them.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "tourpay"
    app_env: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # API Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = ["https://triphabibi.in"]

    # Postgres
    database_url: str = ""
    database_ssl: bool = True

    # Redis (Celery broker for notification jobs)
    redis_url: str = "redis://localhost:6379/0"

    # Storefront
    site_url: str = "https://triphabibi.in"
    business_name: str = "Trip Habibi"
    default_currency: str = "INR"
    checkout_theme_color: str = "#3B82F6"

    # Stripe
    stripe_api_version: str = "2023-10-16"

    # Email (SMTP)
    email_enabled: bool = False
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_from_email: str = ""
    smtp_use_tls: bool = True

    # Notifications
    notification_timeout_seconds: float = 2.0

    # Admin
    admin_api_key: str = ""

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
