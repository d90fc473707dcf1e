"""
Client Generation

This module provides the shared API client, the resource catalog, and the
builder that assembles them into a working Lockstep client.
"""

from .api_client import ApiClient, SDK_VERSION
from .normalizer import normalize_response, normalize_failure
from .catalog import RESOURCES, Endpoint, ResourceDefinition
from .resource_client import ResourceClient, build_resource_client
from .builder import LockstepApi, generate_client

__all__ = [
    "ApiClient",
    "SDK_VERSION",
    "normalize_response",
    "normalize_failure",
    "RESOURCES",
    "Endpoint",
    "ResourceDefinition",
    "ResourceClient",
    "build_resource_client",
    "LockstepApi",
    "generate_client",
]
