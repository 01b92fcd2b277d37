"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ghlogin.constants import SESSION_EXPIRES_DAYS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_url: str = "http://localhost:4321"
    app_name: str = "ghlogin"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None

    # Database
    database_url: str = "sqlite:///./ghlogin.db"

    # GitHub OAuth
    github_client_id: str
    github_client_secret: str
    github_redirect_uri: str | None = None

    # Sessions
    session_cookie_secure: bool | None = None
    session_expires_days: int = SESSION_EXPIRES_DAYS

    @field_validator("github_client_id", "github_client_secret")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty OAuth credentials."""
        if not v.strip():
            raise ValueError("GitHub OAuth credentials must not be empty")
        return v

    @field_validator("session_expires_days")
    @classmethod
    def validate_expires_days(cls, v: int) -> int:
        if v < 1:
            raise ValueError("SESSION_EXPIRES_DAYS must be at least 1")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def cookie_secure(self) -> bool:
        """Whether cookies get the Secure flag.

        Follows SESSION_COOKIE_SECURE when set, otherwise only production
        serves cookies over TLS.
        """
        if self.session_cookie_secure is not None:
            return self.session_cookie_secure
        return self.is_production

    @property
    def github_callback_url(self) -> str:
        """Redirect URI registered with the GitHub OAuth app."""
        if self.github_redirect_uri:
            return self.github_redirect_uri
        return f"{self.app_url.rstrip('/')}/login/github/callback"

    @property
    def database_url_async(self) -> str:
        """Get async database URL (postgresql+asyncpg / sqlite+aiosqlite)."""
        url = self.database_url
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
