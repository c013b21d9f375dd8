"""Unit tests for core.config module.

Tests cover:
- Settings model_validator checks (database URL, session secret)
- is_postgres property
- allowed_origins computed property with deduplication
- get_settings / clear_settings_cache lru_cache behavior
"""

import pytest
from pydantic import ValidationError

from core.config import Settings, clear_settings_cache, get_settings


@pytest.fixture(autouse=True)
def _clear_settings():
    """Clear lru_cache between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.mark.unit
class TestSettingsValidation:
    def test_debug_mode_allows_defaults(self):
        settings = Settings(
            database_url="postgresql+asyncpg://localhost/orders",
            debug=True,
        )
        assert settings.debug is True

    def test_requires_database_url(self):
        with pytest.raises(ValidationError, match="Database configuration"):
            Settings(database_url="", debug=True)

    def test_prod_requires_session_secret(self):
        with pytest.raises(ValidationError, match="SESSION_SECRET_KEY"):
            Settings(database_url="postgresql+asyncpg://localhost/orders", debug=False)

    def test_prod_accepts_real_secret(self):
        settings = Settings(
            database_url="postgresql+asyncpg://localhost/orders",
            debug=False,
            session_secret_key="a" * 64,
        )
        assert settings.session_secret_key == "a" * 64

    def test_pool_defaults(self):
        settings = Settings(database_url="sqlite+aiosqlite:///:memory:", debug=True)
        assert settings.db_pool_size == 5
        assert settings.db_pool_max_overflow == 0


@pytest.mark.unit
class TestIsPostgres:
    def test_asyncpg_url(self):
        settings = Settings(
            database_url="postgresql+asyncpg://localhost/orders", debug=True
        )
        assert settings.is_postgres is True

    def test_sqlite_url(self):
        settings = Settings(database_url="sqlite+aiosqlite:///:memory:", debug=True)
        assert settings.is_postgres is False


@pytest.mark.unit
class TestAllowedOrigins:
    def test_debug_includes_localhost(self):
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            debug=True,
            frontend_url="",
        )
        assert "http://localhost:4200" in settings.allowed_origins

    def test_production_excludes_localhost(self):
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            debug=False,
            session_secret_key="s" * 32,
            frontend_url="https://shop.example.com",
        )
        assert settings.allowed_origins == ["https://shop.example.com"]

    def test_extra_origins_are_deduplicated(self):
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            debug=False,
            session_secret_key="s" * 32,
            frontend_url="https://shop.example.com",
            cors_allowed_origins=(
                "https://shop.example.com, https://staging.example.com,,"
            ),
        )
        assert settings.allowed_origins == [
            "https://shop.example.com",
            "https://staging.example.com",
        ]


@pytest.mark.unit
class TestGetSettings:
    def test_is_cached(self):
        assert get_settings() is get_settings()

    def test_clear_cache_returns_new_instance(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("DB_POOL_SIZE", "9")
        clear_settings_cache()
        second = get_settings()
        assert second is not first
        assert second.db_pool_size == 9
