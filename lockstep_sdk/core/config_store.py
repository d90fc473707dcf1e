"""Configuration and persistence for client settings."""

import json
import logging
import os
from pathlib import Path

from .models import ClientConfig, ConfigError

logger = logging.getLogger(__name__)

ENV_HOME = "LOCKSTEP_SDK_HOME"
ENV_API_KEY = "LOCKSTEP_API_KEY"
ENV_BEARER_TOKEN = "LOCKSTEP_BEARER_TOKEN"
ENV_ENVIRONMENT = "LOCKSTEP_ENVIRONMENT"


def get_base_dir() -> Path:
    """
    Get the base directory for storing configuration.

    The directory is determined by:
    1. Environment variable LOCKSTEP_SDK_HOME if set
    2. Otherwise, ~/.lockstep_sdk

    The directory is created if it does not exist.
    """
    env_home = os.environ.get(ENV_HOME)
    if env_home:
        base_dir = Path(env_home)
    else:
        base_dir = Path.home() / ".lockstep_sdk"

    base_dir.mkdir(parents=True, exist_ok=True)
    return base_dir


def profile_config_path(profile: str = "default") -> Path:
    """Get the path of a profile's configuration file."""
    return get_base_dir() / f"{profile}_config.json"


def save_json(path: Path, data: dict) -> Path:
    """
    Save a dictionary as JSON.

    Raises:
        ConfigError: If the file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        logger.debug(f"Saved JSON to {path}")
        return path
    except OSError as e:
        raise ConfigError(f"Failed to save JSON to {path}: {e}") from e


def load_json(path: Path) -> dict:
    """
    Load a dictionary from a JSON file.

    Raises:
        ConfigError: If the file does not exist or JSON is invalid
    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to load JSON from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {path}")

    logger.debug(f"Loaded JSON from {path}")
    return data


def save_client_config(config: ClientConfig, profile: str = "default") -> Path:
    """
    Save a ClientConfig to disk.

    Credentials are never written; supply them through the environment.
    """
    return save_json(profile_config_path(profile), config.to_dict())


def load_client_config(profile: str = "default") -> ClientConfig:
    """
    Load a ClientConfig for a profile, overlaying environment variables.

    A missing profile file is not an error: defaults are used and the
    environment variables still apply.

    Raises:
        ConfigError: If the profile file exists but is invalid
    """
    path = profile_config_path(profile)
    data = load_json(path) if path.exists() else {}

    try:
        config = ClientConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Failed to parse configuration for profile '{profile}': {e}") from e

    if os.environ.get(ENV_ENVIRONMENT):
        config.environment = os.environ[ENV_ENVIRONMENT]
    if os.environ.get(ENV_API_KEY):
        config.api_key = os.environ[ENV_API_KEY]
    if os.environ.get(ENV_BEARER_TOKEN):
        config.bearer_token = os.environ[ENV_BEARER_TOKEN]

    logger.info(f"Loaded configuration for profile '{profile}' (environment: {config.environment})")
    return config
