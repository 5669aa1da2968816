"""Tests for environment-driven configuration."""

import pydantic
import pytest

from k2auth.config import Config


class TestConfig:
    """Tests for Config defaults and overrides."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("K2AUTH_TOKEN_EXPIRATION_HOURS", raising=False)
        config = Config(_env_file=None)

        assert config.token_expiration_hours == 24
        assert config.session_sweep_interval_seconds == 0
        assert config.cors_origins == ["*"]

    def test_environment_prefix(self, monkeypatch):
        """Test that K2AUTH_ prefixed variables override defaults."""
        monkeypatch.setenv("K2AUTH_TOKEN_EXPIRATION_HOURS", "2")
        monkeypatch.setenv("K2AUTH_PORT", "9000")

        config = Config(_env_file=None)

        assert config.token_expiration_hours == 2
        assert config.port == 9000

    @pytest.mark.parametrize("hours", ["0", "-1"])
    def test_ttl_must_be_positive(self, monkeypatch, hours):
        monkeypatch.setenv("K2AUTH_TOKEN_EXPIRATION_HOURS", hours)
        with pytest.raises(pydantic.ValidationError):
            Config(_env_file=None)
