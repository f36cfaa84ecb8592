"""
Configuration and settings for the portfolio backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_prefix: str = Field(default="/api")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)

    # Record store (any SQLAlchemy URL)
    database_url: Optional[str] = Field(default=None)

    # Outbound mail (SMTP)
    mail_host: str = Field(default="smtp.gmail.com")
    mail_port: int = Field(default=587)
    mail_username: Optional[str] = Field(default=None)
    mail_password: Optional[str] = Field(default=None)
    mail_from_name: str = Field(default="Anshul Kumar")
    mail_subject: str = Field(default="Anshul | Portfolio")

    # Static uploads served under /uploads
    uploads_dir: str = Field(default="uploads")

    cors_allow_origins: str = Field(default="*")

    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default="combined.log")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False,
        validation_alias="PORTFOLIO_USE_IN_MEMORY_BACKENDS",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
