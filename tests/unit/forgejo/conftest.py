"""Pytest fixtures for Forgejo client and adapter tests."""

import httpx
import pytest

from forgejo_mcp.forgejo import ForgejoFetcher
from forgejo_mcp.forgejo.client import ForgejoClient
from forgejo_mcp.forgejo.config import ForgejoConfig


class RecordingTransport:
    """Mock transport that records requests and replays queued responses.

    Responses are consumed in order; once the queue is empty every request
    gets a ``200 {}`` answer.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []

    def queue(self, status_code: int = 200, **kwargs) -> None:
        self._responses.append(httpx.Response(status_code, **kwargs))

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(200, json={})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def forgejo_config():
    """Create a ForgejoConfig instance for tests."""
    return ForgejoConfig(
        url="https://forgejo.example.com",
        token="secret-token",
        server_version="9.0.0",
    )


@pytest.fixture
def recorder():
    return RecordingTransport()


@pytest.fixture
def mock_session(recorder):
    return httpx.Client(transport=httpx.MockTransport(recorder.handler))


@pytest.fixture
def forgejo_client(forgejo_config, mock_session):
    """Create a ForgejoClient sending through the recording transport."""
    return ForgejoClient(forgejo_config, session=mock_session)


@pytest.fixture
def forgejo_fetcher(forgejo_config, mock_session):
    """Create a ForgejoFetcher sending through the recording transport."""
    return ForgejoFetcher(forgejo_config, session=mock_session)
