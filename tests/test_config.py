"""Tests for provider settings."""

import importlib

import pytest
from pydantic import ValidationError

from toshokan.config import Settings

PROVIDER_ENV = (
    "TOKYOTOSHO_BASE_URL",
    "TOKYOTOSHO_VARIANT",
    "TOKYOTOSHO_REQUEST_TIMEOUT",
    "TOKYOTOSHO_LOG_LEVEL",
    "TOKYOTOSHO_ENVIRONMENT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in PROVIDER_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    """Tests for Settings validation."""

    def test_defaults(self, clean_env):
        """Test every field has a usable default."""
        settings = Settings(_env_file=None)
        assert settings.base_url == "https://www.tokyotosho.info"
        assert settings.variant == "full"
        assert settings.request_timeout == 30.0
        assert settings.log_level == "INFO"
        assert settings.is_production

    def test_env_override(self, clean_env):
        """Test values are read from prefixed environment variables."""
        clean_env.setenv("TOKYOTOSHO_BASE_URL", "https://mirror.example/")
        clean_env.setenv("TOKYOTOSHO_VARIANT", "ANIME")
        clean_env.setenv("TOKYOTOSHO_LOG_LEVEL", "debug")
        clean_env.setenv("TOKYOTOSHO_ENVIRONMENT", "Development")

        settings = Settings(_env_file=None)
        assert settings.base_url == "https://mirror.example"
        assert settings.variant == "anime"
        assert settings.log_level == "DEBUG"
        assert settings.is_development

    def test_host_variables_ignored(self, clean_env):
        """Test unprefixed host variables do not reach the provider."""
        clean_env.setenv("ENVIRONMENT", "staging")
        clean_env.setenv("LOG_LEVEL", "verbose")
        clean_env.setenv("BASE_URL", "https://host.example")

        settings = Settings(_env_file=None)
        assert settings.environment == "production"
        assert settings.log_level == "INFO"
        assert settings.base_url == "https://www.tokyotosho.info"

    def test_import_with_host_environment(self, clean_env):
        """Test the module imports when the host uses its own ENVIRONMENT value."""
        clean_env.setenv("ENVIRONMENT", "staging")

        import toshokan.config

        reloaded = importlib.reload(toshokan.config)
        assert reloaded.settings.environment == "production"

    def test_invalid_variant(self, clean_env):
        """Test unknown variants are rejected."""
        with pytest.raises(ValidationError, match="variant"):
            Settings(_env_file=None, variant="nyaa")

    def test_invalid_log_level(self, clean_env):
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError, match="log_level"):
            Settings(_env_file=None, log_level="VERBOSE")

    def test_timeout_must_be_positive(self, clean_env):
        """Test a zero timeout is rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, request_timeout=0)
