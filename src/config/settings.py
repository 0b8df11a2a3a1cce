"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = "development"

    # Storage configuration
    registrations_file: str = "registrations.csv"

    # Logging configuration
    log_dir: str = "logs"
    log_level: str = "INFO"

    # Email configuration (no credentials = notifications disabled)
    email_backend: Literal["smtp", "console"] = "smtp"
    email_user: str | None = None
    email_pass: str | None = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    smtp_timeout_seconds: float = 10.0  # Upper bound for one SMTP conversation
    operator_email: str | None = None  # Defaults to email_user

    # Competition details quoted in confirmation emails
    competition_name: str = "Online Astronomy Competition"
    competition_short_name: str = "OAC"
    competition_date: str = "August 30, 2025"
    competition_time: str = "12:00 - 23:59 Eastern Standard Time"
    competition_contact_email: str = "astronomycompetition@gmail.com"

    # HTTP settings
    cors_origins: list[str] = [
        "https://online-astronomy-competition.web.app",
        "https://online-astronomy-competition.firebaseapp.com",
        "http://localhost:3000",
        "http://localhost:3001",
        "http://localhost:5173",
        "http://localhost:8080",
    ]
    register_rate_limit: int = 5  # Registrations per client per window
    general_rate_limit: int = 100  # API requests per client per window
    rate_window_seconds: int = 15 * 60

    @property
    def email_configured(self) -> bool:
        """True when SMTP credentials are present."""
        return bool(self.email_user and self.email_pass)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
