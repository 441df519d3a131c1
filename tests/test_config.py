import os

import pytest

from vetclinic_client.config import DEFAULT_API_URL, AppSettings, ConfigurationError

ENV_NAMES = [
    "VET_API_URL",
    "VET_TIMEOUT_SECONDS",
    "VET_QUERY_RETRY_ATTEMPTS",
    "VET_QUERY_STALE_SECONDS",
    "VET_STORAGE_PATH",
    "VET_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # .env loading writes straight into os.environ; give each test its own copy
    environ = {key: value for key, value in os.environ.items() if key not in ENV_NAMES}
    environ["VET_ENV_FILE"] = str(tmp_path / "absent.env")
    monkeypatch.setattr(os, "environ", environ)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = AppSettings.from_env()

    assert settings.base_url == DEFAULT_API_URL
    assert settings.timeout_seconds == 30
    assert settings.query_retry_attempts == 2
    assert settings.query_stale_seconds == 300
    assert settings.storage_path.endswith("session.json")
    assert settings.log_level == "INFO"


def test_env_file_values_do_not_override_environment(monkeypatch, tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text(
        "# comment\nVET_API_URL=https://api.example.com/api/v1/\nVET_TIMEOUT_SECONDS='12'\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("VET_ENV_FILE", str(env_file))
    monkeypatch.setenv("VET_TIMEOUT_SECONDS", "5")

    settings = AppSettings.from_env()

    assert settings.base_url == "https://api.example.com/api/v1"
    assert settings.timeout_seconds == 5


def test_invalid_values_are_reported_together(monkeypatch):
    monkeypatch.setenv("VET_API_URL", "ftp://nope")
    monkeypatch.setenv("VET_TIMEOUT_SECONDS", "0")
    monkeypatch.setenv("VET_LOG_LEVEL", "loud")

    with pytest.raises(ConfigurationError) as excinfo:
        AppSettings.from_env()

    message = str(excinfo.value)
    assert "VET_API_URL" in message
    assert "VET_TIMEOUT_SECONDS" in message
    assert "VET_LOG_LEVEL" in message


def test_non_integer_value(monkeypatch):
    monkeypatch.setenv("VET_QUERY_RETRY_ATTEMPTS", "two")

    with pytest.raises(ConfigurationError, match="VET_QUERY_RETRY_ATTEMPTS"):
        AppSettings.from_env()


def test_env_file_in_working_directory_is_read(tmp_path):
    (tmp_path / ".env").write_text("VET_LOG_LEVEL=debug\nnot a setting\n", encoding="utf-8")

    assert AppSettings.from_env().log_level == "DEBUG"
