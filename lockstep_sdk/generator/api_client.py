"""
API Client Implementation

Provides the shared request-dispatch component that every resource client
delegates to: URL resolution, default headers, credential handling, body
serialization and result normalization.
"""

import json
import logging
import platform
from typing import Any

from ..core.models import (
    Credential,
    ErrorResult,
    RequestDescriptor,
    RequestOptions,
)
from ..transport.base import TransportAdapter, TransportError
from ..transport.httpx_transport import HttpxTransport
from .normalizer import ResponseType, normalize_failure, normalize_response

logger = logging.getLogger(__name__)

SDK_VERSION = "0.1.0"


def _machine_name() -> str | None:
    """Host name for the MachineName header, or None if it is empty or not ASCII."""
    name = platform.node()
    try:
        name.encode("ascii")
    except UnicodeEncodeError:
        return None
    return name or None


class ApiClient:
    """
    Shared dispatcher for the Lockstep Platform API.

    Every call resolves with either the expected value or an ErrorResult;
    HTTP error statuses and transport failures are never raised. Only
    programmer errors (e.g. a path that embeds a base URL) raise.

    Features:
    - Base URL fixed at construction
    - Credential attached as a default header, replaceable at any time
    - JSON request bodies
    - Pluggable transport adapter
    """

    def __init__(
        self,
        base_url: str,
        credential: Credential | None = None,
        transport: TransportAdapter | None = None,
        app_name: str | None = None,
        timeout_seconds: float = 30.0,
    ):
        """
        Initialize the API client.

        Args:
            base_url: API host (e.g. "https://api.lockstep.io")
            credential: Optional initial credential
            transport: Optional transport adapter (an HttpxTransport is created if None)
            app_name: Optional application name sent with every request
            timeout_seconds: Timeout for a created transport
        """
        if not base_url.startswith(("http://", "https://")):
            raise ValueError(f"Base URL must be absolute: {base_url!r}")

        self._base_url = base_url.rstrip("/")
        self._credential = credential
        self.app_name = app_name

        # Track if we own the transport (for cleanup)
        self._owns_transport = transport is None
        self.transport = transport or HttpxTransport(timeout_seconds=timeout_seconds)

        self._default_headers = {
            "Accept": "application/json",
            "SdkType": "Python",
            "SdkVersion": SDK_VERSION,
        }
        machine_name = _machine_name()
        if machine_name:
            self._default_headers["MachineName"] = machine_name
        if app_name:
            self._default_headers["ApplicationName"] = app_name

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def credential(self) -> Credential | None:
        return self._credential

    def update_credential(self, credential: Credential | None) -> None:
        """
        Replace the credential used by subsequent calls.

        Requests already in flight keep the headers they were issued with.
        """
        self._credential = credential
        if credential is None:
            logger.info("Credential cleared")
        else:
            logger.info(f"Credential updated (scheme: {credential.scheme.value})")

    def with_api_key(self, api_key: str) -> "ApiClient":
        """Authenticate subsequent calls with an API key."""
        self.update_credential(Credential.api_key(api_key))
        return self

    def with_bearer_token(self, token: str) -> "ApiClient":
        """Authenticate subsequent calls with a bearer token."""
        self.update_credential(Credential.bearer_token(token))
        return self

    def _build_url(self, path: str) -> str:
        """
        Build full URL from base URL and a resource path.

        Args:
            path: API path (e.g., "/api/v1/Emails/abc")

        Returns:
            Full URL
        """
        return f"{self._base_url}{path}"

    def _build_headers(
        self,
        extra_headers: dict[str, str] | None = None,
        has_body: bool = False,
    ) -> dict[str, str]:
        """Get request headers; caller-supplied headers win on conflict."""
        headers = dict(self._default_headers)

        if has_body:
            headers["Content-Type"] = "application/json"

        credential = self._credential
        if credential is not None:
            headers.update(credential.to_headers())

        if extra_headers:
            # Header names are case-insensitive
            overridden = {key.lower() for key in extra_headers}
            headers = {k: v for k, v in headers.items() if k.lower() not in overridden}
            headers.update(extra_headers)

        return headers

    async def dispatch(
        self,
        descriptor: RequestDescriptor,
        headers: dict[str, str] | None = None,
        response_type: ResponseType = None,
    ) -> Any:
        """
        Send a prepared request and normalize its outcome.

        Args:
            descriptor: The request to send
            headers: Extra headers for this call
            response_type: Converter for the success body

        Returns:
            The converted success value, or an ErrorResult
        """
        url = self._build_url(descriptor.path)
        has_body = descriptor.body is not None
        request_headers = self._build_headers(headers, has_body=has_body)
        content = json.dumps(descriptor.body).encode("utf-8") if has_body else None

        logger.debug(f"Request: {descriptor.method} {url} params={descriptor.params}")

        try:
            raw = await self.transport.send(
                descriptor.method,
                url,
                params=descriptor.params or None,
                headers=request_headers,
                content=content,
            )
        except TransportError as e:
            return normalize_failure(e)

        logger.debug(f"Response: {raw.status_code} for {descriptor.method} {url}")
        return normalize_response(raw, response_type)

    async def request(
        self,
        method: str,
        path: str,
        options: RequestOptions | dict | None = None,
        body: Any = None,
        response_type: ResponseType = None,
    ) -> Any | ErrorResult:
        """
        Make an API request.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            path: Resource-relative path starting with "/"
            options: Query parameters and extra headers
            body: JSON-serializable request body
            response_type: Converter for the success body

        Returns:
            The converted success value, or an ErrorResult

        Raises:
            ValueError: If the path is not resource-relative
        """
        opts = RequestOptions.coerce(options)
        descriptor = RequestDescriptor.build(method, path, opts.params, body)
        return await self.dispatch(descriptor, opts.headers, response_type)

    async def get(
        self,
        path: str,
        options: RequestOptions | dict | None = None,
        response_type: ResponseType = None,
    ) -> Any | ErrorResult:
        return await self.request("GET", path, options, None, response_type)

    async def post(
        self,
        path: str,
        options: RequestOptions | dict | None = None,
        body: Any = None,
        response_type: ResponseType = None,
    ) -> Any | ErrorResult:
        return await self.request("POST", path, options, body, response_type)

    async def patch(
        self,
        path: str,
        options: RequestOptions | dict | None = None,
        body: Any = None,
        response_type: ResponseType = None,
    ) -> Any | ErrorResult:
        return await self.request("PATCH", path, options, body, response_type)

    async def delete(
        self,
        path: str,
        options: RequestOptions | dict | None = None,
        response_type: ResponseType = None,
    ) -> Any | ErrorResult:
        return await self.request("DELETE", path, options, None, response_type)

    async def close(self) -> None:
        """Close the transport if we created it."""
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False
