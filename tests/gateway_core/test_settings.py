"""
Tests for environment-driven configuration
"""

import logging

import pytest

from crud_gateway.config.settings import GatewaySettings, configure_logging, get_settings
from crud_gateway.dialects import Dialect


class TestGatewaySettings:

    def test_defaults(self, monkeypatch):
        for name in ("CRUD_GATEWAY_DIALECT", "CRUD_GATEWAY_DATABASE", "CRUD_GATEWAY_LOG_LEVEL", "CRUD_GATEWAY_LOG_PARAMETERS"):
            monkeypatch.delenv(name, raising=False)

        settings = get_settings()

        assert settings.sql_dialect is Dialect.SQLITE
        assert settings.database == ":memory:"
        assert settings.log_level == "INFO"
        assert settings.log_parameters is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CRUD_GATEWAY_DIALECT", "MySQL")
        monkeypatch.setenv("CRUD_GATEWAY_DATABASE", "/tmp/gateway.db")
        monkeypatch.setenv("CRUD_GATEWAY_LOG_LEVEL", "debug")
        monkeypatch.setenv("CRUD_GATEWAY_LOG_PARAMETERS", "yes")

        settings = get_settings()

        assert settings.sql_dialect is Dialect.MYSQL
        assert settings.database == "/tmp/gateway.db"
        assert settings.log_level == "DEBUG"
        assert settings.log_parameters is True

    def test_invalid_values_are_reported_together(self, monkeypatch):
        monkeypatch.setenv("CRUD_GATEWAY_DIALECT", "oracle")
        monkeypatch.setenv("CRUD_GATEWAY_LOG_LEVEL", "chatty")

        with pytest.raises(ValueError) as exc_info:
            get_settings()

        assert "CRUD_GATEWAY_DIALECT" in str(exc_info.value)
        assert "CRUD_GATEWAY_LOG_LEVEL" in str(exc_info.value)

    def test_configure_logging(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging(GatewaySettings(log_level="WARNING"))

        assert calls == [{"level": "WARNING"}]
