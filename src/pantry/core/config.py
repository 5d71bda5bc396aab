"""Configuration management for Pantry.

Settings are loaded with Pydantic Settings from environment variables
(prefixed with ``PANTRY_``) and an optional ``.env`` file. They are read
once at startup and treated as immutable afterwards.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pantry import __version__


class Settings(BaseSettings):
    """Application configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PANTRY_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Pantry"
    app_version: str = __version__
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 3000
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./pantry_data/pantry.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_echo: bool = False
    db_sqlite_foreign_keys: bool = True

    # Security Settings
    secret_key: str = Field(
        default="change-me-in-production-use-openssl-rand-hex-32",
        description="Secret key for session token signing",
    )
    access_token_expire_minutes: int = 60 * 12
    auth_cookie_name: str = "pantry_session"
    auth_cookie_secure: bool = False

    # Operator account, seeded on startup when both are set
    admin_email: str | None = None
    admin_password: str | None = None

    # CORS Settings
    cors_origins: list[str] = Field(default=["http://localhost:3000"])
    cors_allow_credentials: bool = True

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Media Settings
    media_path: str = "./pantry_data/uploads"
    media_url_prefix: str = "/uploads"
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    allowed_mime_types: list[str] = Field(
        default=[
            "image/jpeg",
            "image/png",
            "image/gif",
            "image/webp",
            "image/svg+xml",
            "application/pdf",
            "text/plain",
        ]
    )

    # Webhook Settings
    webhook_timeout_seconds: float = Field(default=5.0, gt=0)
    webhook_user_agent: str | None = None

    @field_validator("cors_origins", "allowed_mime_types", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Accept comma-separated strings as well as lists."""
        if isinstance(v, str) and not v.lstrip().startswith("["):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("media_url_prefix")
    @classmethod
    def normalize_url_prefix(cls, v: str) -> str:
        return "/" + v.strip("/")

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """SQLite cannot be shared between worker processes."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1."
            )
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

    @property
    def effective_webhook_user_agent(self) -> str:
        """User-Agent sent with every outbound webhook call."""
        return self.webhook_user_agent or f"{self.app_name}-Webhook-Service/{self.app_version}"


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()
