"""
Resource client generation.

Builds one client class per ResourceDefinition. Each generated method binds
its arguments, fills in the path, gathers query parameters and calls exactly
one ApiClient verb, returning its result unmodified.
"""

import inspect
import logging
from typing import Any
from urllib.parse import quote

from ..core.models import RequestOptions
from .api_client import ApiClient
from .catalog import QUERY_PARAM_NAMES, Endpoint, ResourceDefinition

logger = logging.getLogger(__name__)


class ResourceClient:
    """Base class for generated resource clients."""

    definition: ResourceDefinition

    def __init__(self, client: ApiClient):
        self._client = client

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.definition.base_path}>"


def _signature_for(endpoint: Endpoint) -> inspect.Signature:
    positional = inspect.Parameter.POSITIONAL_OR_KEYWORD
    parameters = [inspect.Parameter("self", positional)]
    parameters += [inspect.Parameter(name, positional) for name in endpoint.path_params]
    if endpoint.has_body:
        parameters.append(inspect.Parameter("body", positional))
    parameters += [
        inspect.Parameter(name, positional, default=None) for name in endpoint.query_params
    ]
    return inspect.Signature(parameters)


def build_path(definition: ResourceDefinition, endpoint: Endpoint, values: dict[str, Any]) -> str:
    """
    Substitute path parameters into the endpoint's path.

    Raises:
        ValueError: If a path parameter is missing or empty
    """
    substitutions = {}
    for name in endpoint.path_params:
        value = values.get(name)
        if value is None or str(value) == "":
            raise ValueError(f"{endpoint.method_name}() requires a non-empty '{name}'")
        substitutions[name] = quote(str(value), safe="")
    return definition.base_path + endpoint.suffix.format(**substitutions)


def _make_method(definition: ResourceDefinition, endpoint: Endpoint):
    signature = _signature_for(endpoint)
    verb = endpoint.http_method.lower()

    async def method(self, *args, **kwargs):
        bound = signature.bind(self, *args, **kwargs)
        bound.apply_defaults()
        values = bound.arguments

        path = build_path(definition, endpoint, values)
        params = {QUERY_PARAM_NAMES[name]: values[name] for name in endpoint.query_params}
        options = RequestOptions(params=params) if params else None

        call = getattr(self._client, verb)
        if endpoint.has_body:
            return await call(path, options, values["body"], response_type=endpoint.response_type)
        return await call(path, options, response_type=endpoint.response_type)

    method.__name__ = endpoint.method_name
    method.__qualname__ = f"{definition.name}Client.{endpoint.method_name}"
    method.__doc__ = endpoint.doc
    method.__signature__ = signature
    return method


def build_resource_client(definition: ResourceDefinition) -> type[ResourceClient]:
    """
    Generate the client class for a resource.

    Args:
        definition: Resource entry from the catalog

    Returns:
        A ResourceClient subclass named "<Resource>Client"
    """
    namespace: dict[str, Any] = {
        "definition": definition,
        "__doc__": f"Client for the {definition.name} resource ({definition.base_path}).",
    }

    for endpoint in definition.endpoints:
        if endpoint.method_name in namespace:
            raise ValueError(
                f"Duplicate method '{endpoint.method_name}' on resource {definition.name}"
            )
        namespace[endpoint.method_name] = _make_method(definition, endpoint)

    cls = type(f"{definition.name}Client", (ResourceClient,), namespace)
    logger.debug(f"Generated {cls.__name__} with {len(definition.endpoints)} methods")
    return cls
