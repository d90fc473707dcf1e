"""Core data models for the Lockstep SDK."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


class AuthScheme(Enum):
    """Header schemes accepted by the Lockstep Platform."""
    API_KEY = "api_key"
    BEARER = "bearer"


@dataclass(frozen=True)
class Credential:
    """An authentication credential attached to every request."""
    scheme: AuthScheme
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("Credential value must not be empty")

    @classmethod
    def api_key(cls, key: str) -> "Credential":
        return cls(AuthScheme.API_KEY, key)

    @classmethod
    def bearer_token(cls, token: str) -> "Credential":
        return cls(AuthScheme.BEARER, token)

    def to_headers(self) -> dict[str, str]:
        """Return the header carrying this credential."""
        if self.scheme == AuthScheme.API_KEY:
            return {"Api-Key": self.value}
        return {"Authorization": f"Bearer {self.value}"}


@dataclass
class ClientConfig:
    """Settings used to build a client."""
    environment: str = "prd"
    base_url: str | None = None
    api_key: str | None = None
    bearer_token: str | None = None
    app_name: str | None = None
    timeout_seconds: float = 30.0

    def credential(self) -> Credential | None:
        """Return the configured credential, preferring a bearer token."""
        if self.bearer_token:
            return Credential.bearer_token(self.bearer_token)
        if self.api_key:
            return Credential.api_key(self.api_key)
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert ClientConfig to a dictionary, leaving out secrets."""
        return {
            "environment": self.environment,
            "base_url": self.base_url,
            "app_name": self.app_name,
            "timeout_seconds": self.timeout_seconds,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientConfig":
        """Create ClientConfig from a dictionary."""
        return cls(
            environment=data.get("environment", "prd"),
            base_url=data.get("base_url"),
            api_key=data.get("api_key"),
            bearer_token=data.get("bearer_token"),
            app_name=data.get("app_name"),
            timeout_seconds=float(data.get("timeout_seconds", 30.0)),
        )


@dataclass(frozen=True)
class RequestOptions:
    """Per-call options. Only query parameters and extra headers are recognized."""
    params: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def coerce(cls, options: "RequestOptions | dict | None") -> "RequestOptions":
        if options is None:
            return cls()
        if isinstance(options, RequestOptions):
            return options
        return cls(
            params=dict(options.get("params") or {}),
            headers=dict(options.get("headers") or {}),
        )


@dataclass(frozen=True)
class RequestDescriptor:
    """
    A single request, resource-scoped and not yet bound to a base URL.

    Query parameters whose value is None or an empty string never make it
    into `params`, so optional filters are absent from the URL instead of
    being sent as placeholders.
    """
    method: str
    path: str
    params: dict[str, Any] = field(default_factory=dict)
    body: Any = None

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> "RequestDescriptor":
        if not path.startswith("/") or "://" in path:
            raise ValueError(
                f"Request path must be resource-relative and start with '/': {path!r}"
            )
        cleaned = {}
        for key, value in (params or {}).items():
            if value is None or value == "":
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            cleaned[key] = value
        return cls(method=method.upper(), path=path, params=cleaned, body=body)


@dataclass(frozen=True)
class ErrorResult:
    """
    Uniform failure value returned (never raised) by the API client.

    `status` is the HTTP status code, or None when no response was received
    at all (timeout, refused connection, DNS failure).
    """
    status: int | None
    message: str
    errors: dict[str, str] = field(default_factory=dict)
    title: str | None = None
    detail: str | None = None
    type: str | None = None

    @property
    def is_transport_error(self) -> bool:
        return self.status is None


def is_error(result: Any) -> bool:
    """Return True if an API call resolved with an ErrorResult."""
    return isinstance(result, ErrorResult)


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """One page of records returned by a query endpoint."""
    records: tuple[T, ...]
    total_count: int
    page_number: int
    page_size: int

    def __post_init__(self):
        if self.page_size > 0 and len(self.records) > self.page_size:
            raise ValueError(
                f"Page holds {len(self.records)} records but page size is {self.page_size}"
            )

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        record_type: Callable[[Any], T] | None = None,
    ) -> "FetchResult[T]":
        """Create a FetchResult from the server's page body."""
        raw_records = data.get("records") or []
        if record_type is not None:
            records = tuple(record_type(r) for r in raw_records)
        else:
            records = tuple(raw_records)
        return cls(
            records=records,
            total_count=_int_or(data.get("totalCount"), len(records)),
            page_number=_int_or(data.get("pageNumber"), 0),
            page_size=_int_or(data.get("pageSize"), len(records)),
        )

    @classmethod
    def of(cls, record_type: Callable[[Any], T] | None = None) -> Callable[[Any], "FetchResult[T]"]:
        """Return a response converter producing pages of `record_type`."""
        def convert(data: Any) -> "FetchResult[T]":
            return cls.from_dict(data, record_type)
        return convert


def _int_or(value: Any, default: int) -> int:
    """Paging fields may be missing or explicitly null."""
    return default if value is None else int(value)


@dataclass(frozen=True)
class ActionResultModel:
    """Result of delete/disable style operations."""
    messages: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ActionResultModel":
        messages = (data or {}).get("messages") or ()
        if isinstance(messages, str):
            messages = (messages,)
        return cls(messages=tuple(messages))


class EnvironmentNotFoundError(Exception):
    """Raised when an environment is not found in the registry."""
    pass


class ConfigError(Exception):
    """Raised when there is an error loading or saving configuration."""
    pass
