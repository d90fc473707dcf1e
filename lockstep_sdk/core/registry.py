"""Environment registry mapping environment names to API base URLs."""

import logging

from .models import EnvironmentNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_ENVIRONMENTS: dict[str, str] = {
    "prd": "https://api.lockstep.io",
    "sbx": "https://api.sbx.lockstep.io",
}

# In-memory storage for registered environments
_ENVIRONMENTS: dict[str, str] = dict(DEFAULT_ENVIRONMENTS)


def register_environment(name: str, base_url: str) -> str:
    """
    Register an environment in the registry.

    Args:
        name: Short environment name (e.g., "sbx")
        base_url: Base URL for the environment's API, without the /api/v1 prefix

    Returns:
        The normalized base URL

    Note:
        If the name already exists, it will be overwritten.
    """
    if not base_url.startswith(("http://", "https://")):
        raise ValueError(f"Base URL must be absolute: {base_url!r}")

    name = name.lower()
    if name in _ENVIRONMENTS:
        logger.warning(f"Environment '{name}' already exists. Overwriting.")

    normalized = base_url.rstrip("/")
    _ENVIRONMENTS[name] = normalized
    logger.info(f"Registered environment: {name} ({normalized})")

    return normalized


def get_environment(name: str) -> str:
    """
    Resolve an environment name to its base URL.

    Raises:
        EnvironmentNotFoundError: If the environment is not in the registry
    """
    key = name.lower()
    if key not in _ENVIRONMENTS:
        raise EnvironmentNotFoundError(
            f"Environment '{name}' not found. "
            f"Known environments: {', '.join(sorted(_ENVIRONMENTS))}"
        )

    return _ENVIRONMENTS[key]


def list_environments() -> list[tuple[str, str]]:
    """List all registered environments as (name, base_url) pairs sorted by name."""
    return sorted(_ENVIRONMENTS.items())


def reset_registry() -> None:
    """
    Restore the registry to the built-in environments.

    This is primarily intended for testing.
    """
    global _ENVIRONMENTS
    _ENVIRONMENTS = dict(DEFAULT_ENVIRONMENTS)
    logger.debug("Registry reset")
