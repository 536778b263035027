from __future__ import annotations

import pytest
from pydantic import ValidationError

from vite_bridge.domain.models import ViteMode
from vite_bridge.infrastructure.config import ApplicationConfig, ViteConfig, get_settings


def test_vite_config_defaults():
    config = ViteConfig()

    assert config.manifest_path is None
    assert config.entrypoints is None
    assert config.force_mode is None
    assert config.use_heart_beat_check is True
    assert config.enable_dev_server is True
    assert config.server_host == "http://localhost:5173"
    assert config.heart_beat_retries_limit == 5
    assert config.heart_beat_timeout == 10.0
    assert config.prefix is None
    assert config.app_url is None


def test_vite_config_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("VITE_MANIFEST_PATH", "dist/.vite/manifest.json")
    monkeypatch.setenv("VITE_ENTRYPOINTS", '["src/main.ts", "src/app.css"]')
    monkeypatch.setenv("VITE_FORCE_MODE", "manifest")
    monkeypatch.setenv("VITE_SERVER_HOST", "http://vite:5173/")
    monkeypatch.setenv("VITE_HEART_BEAT_RETRIES_LIMIT", "2")

    config = ViteConfig()

    assert config.manifest_path == "dist/.vite/manifest.json"
    assert config.entrypoints == ["src/main.ts", "src/app.css"]
    assert config.force_mode is ViteMode.MANIFEST
    assert config.server_host == "http://vite:5173"
    assert config.heart_beat_retries_limit == 2


def test_vite_config_rejects_bad_values():
    with pytest.raises(ValidationError):
        ViteConfig(server_host="localhost:5173")
    with pytest.raises(ValidationError):
        ViteConfig(heart_beat_retries_limit=-1)
    with pytest.raises(ValidationError):
        ViteConfig(heart_beat_timeout=0)


def test_blank_manifest_path_is_unset():
    assert ViteConfig(manifest_path="  ").manifest_path is None


def test_debug_not_allowed_in_production():
    with pytest.raises(ValidationError):
        ApplicationConfig(environment="production", debug=True)


def test_settings_are_cached_and_lazy(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("VITE_PREFIX", "bundle")

    settings = get_settings()

    assert get_settings() is settings
    assert settings.vite.prefix == "bundle"


def test_production_settings_log_warnings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("APP_ENVIRONMENT", "production")

    settings = get_settings()

    assert settings.logging.level == "WARNING"


def test_explicit_log_level_wins_over_environment_default(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("APP_ENVIRONMENT", "production")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    assert get_settings().logging.level == "DEBUG"


def test_debug_app_logs_at_debug_level(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("APP_DEBUG", "true")

    assert get_settings().logging.level == "DEBUG"
