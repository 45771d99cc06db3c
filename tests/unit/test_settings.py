"""
Unit tests for settings and API config loading.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

import pytest
from pydantic import ValidationError

from exchangeapi.api import api_config as api_config_module
from exchangeapi.common import settings as settings_module


def test_load_settings_success() -> None:
    settings_module.get_settings.cache_clear()
    settings = settings_module.get_settings()
    assert settings.PROJECT_NAME
    assert settings.LOG_LEVEL == settings.LOG_LEVEL.upper()


def test_load_settings_missing_required(monkeypatch: pytest.MonkeyPatch) -> None:
    settings_module.get_settings.cache_clear()
    monkeypatch.delenv("PROJECT_NAME", raising=False)
    with pytest.raises(RuntimeError, match="Missing required environment variables: PROJECT_NAME"):
        settings_module.load_settings(load_env=False)


def test_load_settings_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(RuntimeError, match="Invalid environment configuration"):
        settings_module.load_settings(load_env=False)


def test_log_level_is_normalized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    assert settings_module.load_settings(load_env=False).LOG_LEVEL == "DEBUG"


def test_load_api_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_VERSION_PATH", "/api/v2/")
    monkeypatch.setenv("API_ALLOWED_ORIGINS", "http://a.example, http://b.example")
    monkeypatch.setenv("API_ADMIN_STATUS_MESSAGE", "Read only")

    config = api_config_module.load_api_config(load_env=False)

    assert config.api_version_path == "/api/v2"
    assert config.admin_status_path() == "/api/v2/admin/status"
    assert config.allowed_origins == ["http://a.example", "http://b.example"]
    assert config.admin_status_message == "Read only"


@pytest.mark.parametrize("path", ["api/v1", "/v1", "/api/latest"])
def test_api_config_rejects_bad_version_path(path: str) -> None:
    with pytest.raises(ValidationError):
        api_config_module.ApiConfig(api_version_path=path)


def test_api_config_rejects_blank_status_message() -> None:
    with pytest.raises(ValidationError):
        api_config_module.ApiConfig(admin_status_message="   ")
