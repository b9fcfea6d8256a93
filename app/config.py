"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Gateway settings loaded once from environment variables.

    Instances are frozen: the credential and shared secret are read at
    startup and handed to each component explicitly.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "production"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = Field(
        default=3002,
        validation_alias=AliasChoices("api_port", "port"),
    )

    # Inbound shared secret (x-api-key header)
    gateway_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gateway_api_key", "mcp_api_key"),
    )

    # Vercel
    vercel_token: str = Field(default="")
    vercel_api_url: str = "https://api.vercel.com"
    vercel_team_id: str | None = None
    vercel_timeout_seconds: float = Field(default=30.0, gt=0)

    # Inbound rate limiting, per client address
    rate_limit_requests: int = Field(default=1000, ge=1)
    rate_limit_window_seconds: int = Field(default=3600, ge=1)

    # Upper bound on parallel env var writes for one request
    env_write_concurrency: int = Field(default=5, ge=1, le=50)

    # Largest accepted request body, in bytes
    max_body_bytes: int = Field(default=10 * 1024 * 1024, ge=1)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "json"
    log_directory: str = "logs"
    log_file_name: str = "combined.log"
    error_log_file_name: str = "error.log"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
