"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from core.config import DEFAULT_JWT_SECRET, Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)


class TestJwtSecretRequirement:
    def test_production_refuses_placeholder_secret(self) -> None:
        with pytest.raises(ValidationError, match="JWT_SECRET_KEY"):
            Settings(_env_file=None, app_env="production")

    def test_production_refuses_empty_secret(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, app_env="production", jwt_secret_key="")

    def test_production_accepts_configured_secret(self) -> None:
        settings = Settings(_env_file=None, app_env="production", jwt_secret_key="s3cr3t")

        assert settings.is_production is True
        assert settings.jwt_secret_key == "s3cr3t"

    def test_development_allows_placeholder(self) -> None:
        settings = Settings(_env_file=None, app_env="development")

        assert settings.jwt_secret_key == DEFAULT_JWT_SECRET


class TestDatabaseUrl:
    def test_plain_postgres_url_gets_asyncpg_driver(self) -> None:
        settings = Settings(_env_file=None, database_url="postgresql://db:5432/devconnect")

        assert settings.async_database_url == "postgresql+asyncpg://db:5432/devconnect"
