"""Unit tests for infrastructure.configuration settings classes."""

import pytest

from infrastructure.configuration import (
    DatabaseSettings,
    EventSettings,
    ServerSettings,
    Settings,
    TelemetrySettings,
)

pytestmark = pytest.mark.unit


class TestDatabaseSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        settings = DatabaseSettings(_env_file=None)

        assert settings.DATABASE_URL == "sqlite:///./http-sms.db"
        assert settings.DATABASE_ECHO is False
        assert settings.DATABASE_AUTO_MIGRATE is True

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp/test.db")
        monkeypatch.setenv("DATABASE_AUTO_MIGRATE", "false")

        settings = DatabaseSettings(_env_file=None)

        assert settings.DATABASE_URL == "sqlite:///tmp/test.db"
        assert settings.DATABASE_AUTO_MIGRATE is False


class TestServerSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("APP_HTTP_LOGGER", raising=False)
        monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)
        settings = ServerSettings(_env_file=None)

        assert settings.APP_HTTP_LOGGER is False
        assert settings.CORS_ALLOW_ORIGINS == ["*"]
        assert settings.API_PREFIX == "/v1"

    def test_cors_origins_from_json_list(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", '["https://httpsms.com"]')

        settings = ServerSettings(_env_file=None)

        assert settings.CORS_ALLOW_ORIGINS == ["https://httpsms.com"]


class TestEventSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("EVENTS_PUBLISH_TIMEOUT_SECONDS", raising=False)
        settings = EventSettings(_env_file=None)

        assert settings.EVENTS_PERSIST is True
        assert settings.EVENTS_PUBLISH_TIMEOUT_SECONDS is None

    def test_publish_timeout_from_environment(self, monkeypatch):
        monkeypatch.setenv("EVENTS_PUBLISH_TIMEOUT_SECONDS", "2.5")

        assert EventSettings(_env_file=None).EVENTS_PUBLISH_TIMEOUT_SECONDS == 2.5


class TestTelemetrySettings:
    def test_service_name_default(self, monkeypatch):
        monkeypatch.delenv("OTEL_SERVICE_NAME", raising=False)

        assert TelemetrySettings(_env_file=None).OTEL_SERVICE_NAME == "http-sms-manager"


class TestSettings:
    def test_sub_settings_are_instantiated(self):
        settings = Settings()

        assert isinstance(settings.database, DatabaseSettings)
        assert isinstance(settings.server, ServerSettings)
        assert isinstance(settings.events, EventSettings)
        assert isinstance(settings.telemetry, TelemetrySettings)

    def test_explicit_sub_settings_are_kept(self):
        database = DatabaseSettings(DATABASE_URL="sqlite://")

        settings = Settings(database=database)

        assert settings.database is database

    @pytest.mark.parametrize("env,expected", [("local", True), ("production", False)])
    def test_is_local(self, env, expected):
        assert Settings(ENV=env).is_local is expected

    def test_env_vars_are_case_sensitive(self, monkeypatch):
        monkeypatch.setenv("git_sha", "lowercase")
        monkeypatch.delenv("GIT_SHA", raising=False)

        assert Settings(_env_file=None).GIT_SHA == "Unknown"
