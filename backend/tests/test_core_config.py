"""
Tests for app/core/config.py - Configuration and settings validation.
"""
import importlib

import pytest


@pytest.fixture(autouse=True)
def restore_settings():
    """Reload config with the test environment after each case."""
    yield
    from app.core import config
    try:
        importlib.reload(config)
    except ValueError:
        pass


def _production_env(monkeypatch, **overrides):
    env = {
        "ENVIRONMENT": "production",
        "DEBUG": "false",
        "POSTGRES_PASSWORD": "a-strong-db-password",
        "ALLOWED_ORIGINS": "https://staffing.example.com",
    }
    env.update(overrides)
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("DATABASE_URL", raising=False)


class TestSettingsValidation:
    """Test configuration validation logic."""

    def test_development_defaults(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.setenv("DEBUG", "true")

        from app.core import config
        importlib.reload(config)

        assert config.settings.MAX_TOTAL_ALLOCATION == 100
        assert config.settings.ALLOCATION_DECIMALS == 2
        assert config.settings.DATABASE_URL.startswith("postgresql+asyncpg://")

    def test_secure_production_config_loads(self, monkeypatch):
        _production_env(monkeypatch)

        from app.core import config
        importlib.reload(config)

        assert config.settings.ALLOWED_ORIGINS == ["https://staffing.example.com"]

    def test_production_rejects_insecure_db_password(self, monkeypatch):
        _production_env(monkeypatch, POSTGRES_PASSWORD="postgres")

        from app.core import config

        with pytest.raises(ValueError) as exc_info:
            importlib.reload(config)

        assert "insecure" in str(exc_info.value).lower()

    def test_production_rejects_insecure_database_url(self, monkeypatch):
        _production_env(monkeypatch)
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://app:changeme@db:5432/staffing")

        from app.core import config

        with pytest.raises(ValueError, match="DATABASE_URL contains an insecure password"):
            importlib.reload(config)

    def test_production_rejects_localhost_origins(self, monkeypatch):
        _production_env(monkeypatch, ALLOWED_ORIGINS="http://localhost:3000")

        from app.core import config

        with pytest.raises(ValueError, match="ALLOWED_ORIGINS"):
            importlib.reload(config)

    def test_production_rejects_debug(self, monkeypatch):
        _production_env(monkeypatch, DEBUG="true")

        from app.core import config

        with pytest.raises(ValueError, match="DEBUG must be False"):
            importlib.reload(config)

    def test_all_errors_reported_together(self, monkeypatch):
        _production_env(monkeypatch, DEBUG="true", POSTGRES_PASSWORD="password")

        from app.core import config

        with pytest.raises(ValueError) as exc_info:
            importlib.reload(config)

        message = str(exc_info.value)
        assert "POSTGRES_PASSWORD" in message
        assert "DEBUG" in message

    @pytest.mark.parametrize("key, value", [("MAX_TOTAL_ALLOCATION", "0"), ("ALLOCATION_DECIMALS", "-1")])
    def test_rejects_invalid_allocation_settings(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)

        from app.core import config

        with pytest.raises(ValueError, match=key):
            importlib.reload(config)

    def test_origins_accept_comma_separated_string(self, monkeypatch):
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example.com, https://b.example.com")

        from app.core import config
        importlib.reload(config)

        assert config.settings.ALLOWED_ORIGINS == ["https://a.example.com", "https://b.example.com"]
