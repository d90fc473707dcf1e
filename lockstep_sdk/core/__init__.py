"""Core components for the Lockstep SDK."""

from .models import (
    AuthScheme,
    Credential,
    ClientConfig,
    RequestOptions,
    RequestDescriptor,
    ErrorResult,
    FetchResult,
    ActionResultModel,
    is_error,
    EnvironmentNotFoundError,
    ConfigError,
)
from .registry import register_environment, get_environment, list_environments, reset_registry
from .config_store import (
    get_base_dir,
    profile_config_path,
    save_json,
    load_json,
    save_client_config,
    load_client_config,
)

__all__ = [
    "AuthScheme",
    "Credential",
    "ClientConfig",
    "RequestOptions",
    "RequestDescriptor",
    "ErrorResult",
    "FetchResult",
    "ActionResultModel",
    "is_error",
    "EnvironmentNotFoundError",
    "ConfigError",
    "register_environment",
    "get_environment",
    "list_environments",
    "reset_registry",
    "get_base_dir",
    "profile_config_path",
    "save_json",
    "load_json",
    "save_client_config",
    "load_client_config",
]
