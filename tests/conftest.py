"""Shared fixtures for the Lockstep SDK tests."""

import json

import pytest

from lockstep_sdk.core.models import Credential
from lockstep_sdk.core.registry import reset_registry
from lockstep_sdk.generator.api_client import ApiClient
from lockstep_sdk.transport.base import RawResponse, TransportAdapter, TransportError


class RecordingTransport(TransportAdapter):
    """
    Fake transport that records every call and replays queued outcomes.

    Queue RawResponse objects or exceptions with `queue()`; when the queue is
    empty a 200 response with an empty JSON object is returned.
    """

    def __init__(self):
        self.calls: list[dict] = []
        self.outcomes: list = []
        self.closed = False

    def queue(self, *outcomes) -> None:
        self.outcomes.extend(outcomes)

    def queue_json(self, status_code: int, data) -> None:
        self.outcomes.append(
            RawResponse(status_code=status_code, content=json.dumps(data).encode())
        )

    async def send(self, method, url, *, params=None, headers=None, content=None):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "params": params,
                "headers": headers,
                "content": content,
            }
        )
        outcome = self.outcomes.pop(0) if self.outcomes else RawResponse(200, content=b"{}")
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        self.closed = True

    @property
    def last_call(self) -> dict:
        return self.calls[-1]


@pytest.fixture(autouse=True)
def clean_registry():
    """Reset the environment registry around each test."""
    reset_registry()
    yield
    reset_registry()


@pytest.fixture
def transport():
    """Create a recording transport."""
    return RecordingTransport()


@pytest.fixture
def api_client(transport):
    """Create an API client bound to the recording transport."""
    return ApiClient(
        base_url="https://api.test.lockstep.io",
        credential=Credential.api_key("test_key"),
        transport=transport,
    )


@pytest.fixture
def connection_refused():
    """A transport failure like the one raised for a refused connection."""
    return TransportError("Request failed: [Errno 111] Connection refused")
