"""Tests for the configuration store."""

import json
import pytest

from lockstep_sdk.core.models import ClientConfig, ConfigError
from lockstep_sdk.core.config_store import (
    get_base_dir,
    profile_config_path,
    save_json,
    load_json,
    save_client_config,
    load_client_config,
)


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Set up a temporary home directory for config storage."""
    monkeypatch.setenv("LOCKSTEP_SDK_HOME", str(tmp_path))
    for name in ("LOCKSTEP_API_KEY", "LOCKSTEP_BEARER_TOKEN", "LOCKSTEP_ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def test_get_base_dir_with_env_var(temp_home):
    """Test get_base_dir uses LOCKSTEP_SDK_HOME environment variable."""
    base_dir = get_base_dir()
    assert base_dir == temp_home
    assert base_dir.exists()


def test_get_base_dir_creates_directory(temp_home):
    """Test get_base_dir creates the directory if it doesn't exist."""
    temp_home.rmdir()
    assert not temp_home.exists()

    base_dir = get_base_dir()
    assert base_dir.exists()
    assert base_dir.is_dir()


def test_profile_config_path(temp_home):
    """Test profile_config_path generates correct paths."""
    assert profile_config_path() == temp_home / "default_config.json"
    assert profile_config_path("sandbox") == temp_home / "sandbox_config.json"


def test_save_and_load_json(temp_home):
    """Test saving and loading JSON data."""
    data = {"key1": "value1", "key2": 42, "key3": ["list", "of", "items"]}

    path = save_json(temp_home / "nested" / "data.json", data)
    assert path.exists()

    assert load_json(path) == data


def test_load_json_missing_file(temp_home):
    """Test load_json raises ConfigError for missing file."""
    with pytest.raises(ConfigError) as exc_info:
        load_json(temp_home / "nonexistent.json")

    assert "not found" in str(exc_info.value).lower()


def test_load_json_invalid_json(temp_home):
    """Test load_json raises ConfigError for invalid JSON."""
    path = temp_home / "invalid.json"
    path.write_text("{ invalid json content")

    with pytest.raises(ConfigError) as exc_info:
        load_json(path)

    assert "invalid json" in str(exc_info.value).lower()


def test_load_json_requires_object(temp_home):
    """Test load_json rejects a JSON document that is not an object."""
    path = temp_home / "list.json"
    path.write_text("[1, 2, 3]")

    with pytest.raises(ConfigError):
        load_json(path)


def test_save_client_config_omits_credentials(temp_home):
    """Test credentials are never written to disk."""
    config = ClientConfig(environment="sbx", api_key="secret-key", app_name="Billing")

    path = save_client_config(config)

    stored = json.loads(path.read_text())
    assert stored["environment"] == "sbx"
    assert stored["app_name"] == "Billing"
    assert "secret-key" not in path.read_text()


def test_save_and_load_client_config(temp_home):
    """Test round-tripping a profile."""
    save_client_config(ClientConfig(environment="sbx", timeout_seconds=12.5), profile="work")

    loaded = load_client_config("work")

    assert loaded.environment == "sbx"
    assert loaded.timeout_seconds == 12.5
    assert loaded.api_key is None


def test_load_client_config_without_file_uses_defaults(temp_home):
    """Test a missing profile falls back to defaults."""
    config = load_client_config("missing")

    assert config.environment == "prd"
    assert config.credential() is None


def test_load_client_config_overlays_environment(temp_home, monkeypatch):
    """Test environment variables override the stored profile."""
    save_client_config(ClientConfig(environment="prd"))
    monkeypatch.setenv("LOCKSTEP_ENVIRONMENT", "sbx")
    monkeypatch.setenv("LOCKSTEP_API_KEY", "env-key")

    config = load_client_config()

    assert config.environment == "sbx"
    assert config.api_key == "env-key"


def test_load_client_config_invalid_values(temp_home):
    """Test unparsable values raise ConfigError."""
    profile_config_path().write_text(json.dumps({"timeout_seconds": "soon"}))

    with pytest.raises(ConfigError):
        load_client_config()
