"""Tests for the client builder."""

from unittest.mock import patch

import pytest

from lockstep_sdk.core import (
    ClientConfig,
    Credential,
    EnvironmentNotFoundError,
    register_environment,
    save_client_config,
)
from lockstep_sdk.generator import LockstepApi, generate_client
from lockstep_sdk.generator.api_client import ApiClient
from lockstep_sdk.generator.catalog import RESOURCES


@pytest.fixture
def temp_config_dir(tmp_path, monkeypatch):
    """Create temporary config directory."""
    config_dir = tmp_path / "lockstep_config"
    config_dir.mkdir()
    monkeypatch.setenv("LOCKSTEP_SDK_HOME", str(config_dir))
    for name in ("LOCKSTEP_API_KEY", "LOCKSTEP_BEARER_TOKEN", "LOCKSTEP_ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    return config_dir


def test_generate_client_from_environment(transport):
    """Test building a client for a named environment."""
    api = generate_client(ClientConfig(environment="sbx", api_key="key"), transport=transport)

    assert isinstance(api, LockstepApi)
    assert isinstance(api.client, ApiClient)
    assert api.client.base_url == "https://api.sbx.lockstep.io"
    assert api.client.credential == Credential.api_key("key")
    assert api.client.transport is transport


def test_generate_client_explicit_base_url_wins(transport):
    """Test an explicit base URL overrides the environment."""
    api = generate_client(
        ClientConfig(environment="sbx", base_url="http://localhost:5000"),
        transport=transport,
    )

    assert api.client.base_url == "http://localhost:5000"


def test_generate_client_registered_environment(transport):
    """Test custom environments from the registry are honoured."""
    register_environment("qa", "https://qa.example.test")

    api = generate_client(ClientConfig(environment="qa"), transport=transport)

    assert api.client.base_url == "https://qa.example.test"
    assert api.client.credential is None


def test_generate_client_unknown_environment(transport):
    """Test an unknown environment name fails fast."""
    with pytest.raises(EnvironmentNotFoundError):
        generate_client(ClientConfig(environment="nowhere"), transport=transport)


def test_generate_client_loads_profile(temp_config_dir, monkeypatch, transport):
    """Test a stored profile plus environment credentials are used when no config is given."""
    save_client_config(ClientConfig(environment="sbx", app_name="Billing"), profile="work")
    monkeypatch.setenv("LOCKSTEP_BEARER_TOKEN", "jwt")

    api = generate_client(transport=transport, profile="work")

    assert api.client.base_url == "https://api.sbx.lockstep.io"
    assert api.client.app_name == "Billing"
    assert api.client.credential == Credential.bearer_token("jwt")


def test_generate_client_uses_default_profile(transport):
    """Test the default profile is loaded when no config is passed."""
    with patch(
        "lockstep_sdk.generator.builder.load_client_config",
        return_value=ClientConfig(api_key="key"),
    ) as mock_load:
        api = generate_client(transport=transport)

    mock_load.assert_called_once_with("default")
    assert api.client.base_url == "https://api.lockstep.io"


def test_resource_clients_share_one_api_client(transport):
    """Test every resource client delegates to the same API client."""
    api = generate_client(ClientConfig(api_key="key"), transport=transport)

    for definition in RESOURCES:
        resource = getattr(api, definition.attribute)
        assert resource._client is api.client


@pytest.mark.asyncio
async def test_rotation_through_facade_reaches_resource_calls(transport):
    """Test credential rotation on the facade applies to later resource calls."""
    api = generate_client(ClientConfig(api_key="old"), transport=transport)

    await api.leads.create_leads([{"name": "Lead"}])
    api.with_bearer_token("jwt")
    await api.leads.create_leads([{"name": "Lead"}])

    assert transport.calls[0]["headers"]["Api-Key"] == "old"
    assert transport.calls[1]["headers"]["Authorization"] == "Bearer jwt"
    assert "Api-Key" not in transport.calls[1]["headers"]


@pytest.mark.asyncio
async def test_facade_context_manager(transport):
    """Test the facade closes its client on exit."""
    async with generate_client(ClientConfig(api_key="key"), transport=transport) as api:
        result = await api.contacts.retrieve_contact("c1")

    assert result == {}
    assert transport.calls[0]["url"] == "https://api.lockstep.io/api/v1/Contacts/c1"
