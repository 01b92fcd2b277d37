"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from ghlogin.config import Settings


def make_settings(**overrides) -> Settings:
    values = {"github_client_id": "id", "github_client_secret": "secret", **overrides}
    return Settings(_env_file=None, **values)


class TestSettings:
    """Tests for Settings."""

    def test_database_url_async_sqlite(self):
        settings = make_settings(database_url="sqlite:///./app.db")
        assert settings.database_url_async == "sqlite+aiosqlite:///./app.db"

    def test_database_url_async_postgres(self):
        settings = make_settings(database_url="postgresql://u:p@db/app")
        assert settings.database_url_async == "postgresql+asyncpg://u:p@db/app"

    def test_database_url_async_passthrough(self):
        settings = make_settings(database_url="postgresql+asyncpg://u:p@db/app")
        assert settings.database_url_async == "postgresql+asyncpg://u:p@db/app"

    def test_callback_url_default(self):
        settings = make_settings(app_url="http://localhost:4321")
        assert settings.github_callback_url == "http://localhost:4321/login/github/callback"

    def test_callback_url_override(self):
        settings = make_settings(github_redirect_uri="https://auth.example.com/cb")
        assert settings.github_callback_url == "https://auth.example.com/cb"

    def test_cookie_secure_from_env(self, monkeypatch: pytest.MonkeyPatch):
        """Test SESSION_COOKIE_SECURE is read from the environment."""
        monkeypatch.setenv("SESSION_COOKIE_SECURE", "true")
        assert make_settings(app_env="development").cookie_secure is True

    def test_blank_credentials_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(github_client_secret="  ")

    def test_expires_days_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_settings(session_expires_days=0)
