"""
Centralized settings loaded from environment variables.

Usage:
    from treino.config import get_settings

    settings = get_settings()
    print(settings.database_path)

For tests, build a Settings instance directly and pass it to create_app():

    settings = Settings(environment="test", _env_file=None)
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

AUTH_PROVIDERS = {"firebase", "shared_secret"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )
    log_level: str = Field(default="INFO", description="Root log level")

    # -------------------------------------------------------------------------
    # Database
    # -------------------------------------------------------------------------
    database_path: Path = Field(
        default=Path("data") / "treino.db",
        description="SQLite database file",
    )

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------
    auth_provider: str = Field(
        default="firebase",
        description="Token verifier: firebase or shared_secret",
    )
    firebase_project_id: Optional[str] = Field(
        default=None,
        description="Firebase project whose ID tokens are accepted",
    )
    jwt_secret: Optional[str] = Field(
        default=None,
        description="HS256 secret for the shared_secret verifier",
    )
    jwt_issuer: Optional[str] = Field(default=None, description="Expected iss claim")
    jwt_audience: Optional[str] = Field(default=None, description="Expected aud claim")

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------
    host: str = Field(default="127.0.0.1", description="Bind address for serve")
    port: int = Field(default=3000, description="Bind port for serve")
    allowed_origins: str = Field(
        default="",
        description="Comma-separated CORS origins; empty allows any origin",
    )

    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse allowed origins into a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("auth_provider")
    @classmethod
    def validate_auth_provider(cls, v: str) -> str:
        if v.lower() not in AUTH_PROVIDERS:
            raise ValueError(
                f"Invalid auth provider '{v}'. Must be one of: {AUTH_PROVIDERS}"
            )
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    For testing, clear the cache with get_settings.cache_clear().
    """
    return Settings()
