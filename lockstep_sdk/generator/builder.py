"""
Builder module for assembling a Lockstep client.

This module provides the LockstepApi facade, which owns one ApiClient and
exposes a generated resource client for every catalog entry, and the
generate_client function that builds one from configuration.
"""

import logging

from ..core import ClientConfig, get_environment, load_client_config
from ..transport.base import TransportAdapter
from .api_client import ApiClient
from .catalog import RESOURCES
from .resource_client import ResourceClient, build_resource_client

logger = logging.getLogger(__name__)

RESOURCE_CLIENTS: dict[str, type[ResourceClient]] = {
    definition.attribute: build_resource_client(definition) for definition in RESOURCES
}


class LockstepApi:
    """
    Top-level client for the Lockstep Platform.

    Usage:
        async with generate_client(ClientConfig(environment="sbx", api_key="...")) as api:
            email = await api.emails.retrieve_email("abc-123", "Attachments")
            if is_error(email):
                ...
    """

    def __init__(self, client: ApiClient):
        """
        Initialize the facade around a shared API client.

        Args:
            client: The API client every resource client delegates to
        """
        self.client = client
        for attribute, client_cls in RESOURCE_CLIENTS.items():
            setattr(self, attribute, client_cls(client))

    def with_api_key(self, api_key: str) -> "LockstepApi":
        self.client.with_api_key(api_key)
        return self

    def with_bearer_token(self, token: str) -> "LockstepApi":
        self.client.with_bearer_token(token)
        return self

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "LockstepApi":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False


def generate_client(
    config: ClientConfig | None = None,
    transport: TransportAdapter | None = None,
    profile: str = "default",
) -> LockstepApi:
    """
    Build a LockstepApi from configuration.

    Args:
        config: Client configuration (loaded from the profile and environment if None)
        transport: Optional transport adapter, mainly for tests
        profile: Profile to load when no config is given

    Returns:
        Configured LockstepApi ready to use

    Raises:
        EnvironmentNotFoundError: If no base URL is set and the environment is unknown
        ConfigError: If the stored profile is invalid

    Example:
        >>> api = generate_client(ClientConfig(environment="sbx", api_key="key"))
        >>> page = await api.companies.query_companies(page_size=50)
        >>> await api.close()
    """
    if config is None:
        config = load_client_config(profile)

    base_url = config.base_url or get_environment(config.environment)

    client = ApiClient(
        base_url=base_url,
        credential=config.credential(),
        transport=transport,
        app_name=config.app_name,
        timeout_seconds=config.timeout_seconds,
    )

    if client.credential is None:
        logger.warning("No credential configured; requests will be unauthenticated")

    logger.info(f"Created Lockstep client for {base_url}")
    return LockstepApi(client)
