"""
Application settings using Pydantic.

Provides environment-based configuration loading with ALERTPAGER_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Acknowledgement window before escalating to the next level
    ack_timeout_seconds: int = 900

    # Alert state storage
    database_url: str = "sqlite:///alertpager.db"

    # Debug / logging
    debug: bool = False
    log_level: str = "INFO"

    # Escalation policy
    policy_file: str = "escalation-policy.yaml"

    # Email delivery (SMTP)
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    email_from: str = "alertpager@localhost"

    # SMS delivery (HTTP gateway)
    sms_gateway_url: str | None = None
    sms_gateway_token: str | None = None

    # HTTP client settings
    http_timeout: float = 10.0
    http_max_retries: int = 3

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "ALERTPAGER_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
