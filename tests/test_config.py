"""Tests for environment-driven settings."""

import dataclasses

import pytest

from ghl_mcp.config import Settings


class TestSettings:
    """Tests for the Settings dataclass."""

    def test_defaults(self, monkeypatch):
        """Unset variables fall back to the documented defaults."""
        for name in ("GHL_BASE_URL", "GHL_API_VERSION", "PORT", "MCP_SERVER_PORT", "GHL_REQUEST_TIMEOUT", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        config = Settings()

        assert config.ghl_base_url == "https://services.leadconnectorhq.com"
        assert config.ghl_api_version == "2021-07-28"
        assert config.port == 9000
        assert config.request_timeout == 30.0
        assert config.log_level == "INFO"

    def test_port_prefers_port_variable(self, monkeypatch):
        """PORT wins over MCP_SERVER_PORT."""
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("MCP_SERVER_PORT", "7000")
        assert Settings().port == 8080

        monkeypatch.delenv("PORT")
        assert Settings().port == 7000

    def test_cors_origins_are_split_and_trimmed(self, monkeypatch):
        """CORS_ORIGINS is a comma separated list."""
        monkeypatch.setenv("CORS_ORIGINS", " https://a.example , https://b.example,,")
        assert Settings().cors_origins == ["https://a.example", "https://b.example"]

    def test_log_level_is_upper_cased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings().log_level == "DEBUG"

    def test_frozen(self, test_settings):
        """Settings cannot be changed after creation."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            test_settings.port = 1

    def test_require_credentials_names_missing_variables(self):
        """Missing credentials are reported by variable name."""
        with pytest.raises(ValueError, match="GHL_API_KEY, GHL_LOCATION_ID"):
            Settings(ghl_api_key="", ghl_location_id="").require_credentials()

        with pytest.raises(ValueError, match="GHL_LOCATION_ID"):
            Settings(ghl_api_key="key", ghl_location_id="").require_credentials()

    def test_require_credentials_passes(self, test_settings):
        test_settings.require_credentials()
