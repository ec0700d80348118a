"""Tests for configuration module."""

import pytest

from merchant_admin.config import (
    AppConfig,
    DataServiceConfig,
    EditorConfig,
    Settings,
    _env,
    _env_float,
    _env_int,
    load_settings,
)


@pytest.mark.unit
def test_env_returns_value(monkeypatch):
    monkeypatch.setenv("TEST_KEY", "hello")
    assert _env("TEST_KEY") == "hello"


@pytest.mark.unit
def test_env_returns_default_when_missing(monkeypatch):
    monkeypatch.delenv("TEST_KEY", raising=False)
    assert _env("TEST_KEY", "fallback") == "fallback"


@pytest.mark.unit
def test_env_int_ignores_garbage(monkeypatch):
    monkeypatch.setenv("TEST_KEY", "soon")
    assert _env_int("TEST_KEY", 7) == 7


@pytest.mark.unit
def test_env_float_parses(monkeypatch):
    monkeypatch.setenv("TEST_KEY", "2.5")
    assert _env_float("TEST_KEY", 1.0) == 2.5


@pytest.mark.unit
def test_app_config_is_development_true():
    config = AppConfig.__new__(AppConfig)
    object.__setattr__(config, "env", "development")
    assert config.is_development is True


@pytest.mark.unit
def test_app_config_is_development_false():
    config = AppConfig.__new__(AppConfig)
    object.__setattr__(config, "env", "production")
    assert config.is_development is False


@pytest.mark.unit
def test_data_service_config_defaults(monkeypatch):
    monkeypatch.delenv("DATA_SERVICE_URL", raising=False)
    monkeypatch.delenv("DATA_SERVICE_TOKEN", raising=False)
    monkeypatch.delenv("DATA_SERVICE_TIMEOUT", raising=False)
    config = DataServiceConfig()
    assert config.base_url == "http://localhost:3000"
    assert config.token == ""
    assert config.timeout == 10.0


@pytest.mark.unit
def test_data_service_config_from_env(monkeypatch):
    monkeypatch.setenv("DATA_SERVICE_URL", "https://data.example.com")
    monkeypatch.setenv("DATA_SERVICE_TOKEN", "secret")
    config = DataServiceConfig()
    assert config.base_url == "https://data.example.com"
    assert config.token == "secret"


@pytest.mark.unit
def test_editor_config_defaults(monkeypatch):
    monkeypatch.delenv("AUTOSAVE_DEBOUNCE_MS", raising=False)
    monkeypatch.delenv("SAVED_DISPLAY_MS", raising=False)
    config = EditorConfig()
    assert config.debounce_ms == 3000
    assert config.saved_display_ms == 2000


@pytest.mark.unit
def test_editor_config_override(monkeypatch):
    monkeypatch.setenv("AUTOSAVE_DEBOUNCE_MS", "500")
    assert EditorConfig().debounce_ms == 500


@pytest.mark.unit
def test_settings_composes_all_configs():
    settings = Settings()
    assert isinstance(settings.app, AppConfig)
    assert isinstance(settings.data_service, DataServiceConfig)
    assert isinstance(settings.editor, EditorConfig)


@pytest.mark.unit
def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    assert load_settings().app.is_development is False
