"""Tests for environment settings."""

from pathlib import Path

import pytest

from membership_registry.config import Settings, DEFAULT_ENDPOINT_URL
from membership_registry.exceptions import ConfigError

_VARS = [
    "REGISTRY_SPREADSHEET_ID",
    "REGISTRY_SERVICE_ACCOUNT_FILE",
    "REGISTRY_SHEET_NAME",
    "REGISTRY_ENDPOINT_URL",
    "REGISTRY_REQUEST_TIMEOUT",
    "REGISTRY_ALLOWED_ORIGINS",
    "REGISTRY_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in _VARS:
        # setenv first so values loaded from .env are undone at teardown.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # An empty .env keeps a developer's local file out of the test.
    env_file = tmp_path / ".env"
    env_file.write_text("")
    return env_file


def test_defaults(clean_env):
    settings = Settings.from_env(clean_env)
    assert settings.spreadsheet_id is None
    assert settings.sheet_name == "Registrations"
    assert settings.endpoint_url == DEFAULT_ENDPOINT_URL
    assert settings.request_timeout == 10.0
    assert settings.allowed_origins == ["*"]


def test_reads_environment(clean_env, monkeypatch):
    monkeypatch.setenv("REGISTRY_SPREADSHEET_ID", "sheet-123")
    monkeypatch.setenv("REGISTRY_SERVICE_ACCOUNT_FILE", "/keys/sa.json")
    monkeypatch.setenv("REGISTRY_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("REGISTRY_ALLOWED_ORIGINS", "https://a.org, https://b.org")
    monkeypatch.setenv("REGISTRY_LOG_LEVEL", "debug")
    settings = Settings.from_env(clean_env)
    assert settings.require_sheets() == ("sheet-123", Path("/keys/sa.json"))
    assert settings.request_timeout == 2.5
    assert settings.allowed_origins == ["https://a.org", "https://b.org"]
    assert settings.log_level == "DEBUG"


def test_loads_dotenv_file(clean_env):
    clean_env.write_text("REGISTRY_SHEET_NAME=Members\n")
    settings = Settings.from_env(clean_env)
    assert settings.sheet_name == "Members"


def test_bad_timeout(clean_env, monkeypatch):
    monkeypatch.setenv("REGISTRY_REQUEST_TIMEOUT", "soon")
    with pytest.raises(ConfigError, match="must be a number"):
        Settings.from_env(clean_env)


def test_require_sheets_missing_id():
    with pytest.raises(ConfigError, match="REGISTRY_SPREADSHEET_ID"):
        Settings().require_sheets()
