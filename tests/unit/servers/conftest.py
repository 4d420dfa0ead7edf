"""Fixtures running the Forgejo tool servers against a fake Forgejo API."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import httpx
import pytest
from fastmcp import Client, FastMCP
from fastmcp.client import FastMCPTransport

from forgejo_mcp.forgejo import ForgejoFetcher
from forgejo_mcp.forgejo.config import ForgejoConfig
from forgejo_mcp.servers.actions import actions_mcp
from forgejo_mcp.servers.context import MainAppContext
from forgejo_mcp.servers.issues import issues_mcp
from forgejo_mcp.servers.labels import labels_mcp
from forgejo_mcp.servers.main import ForgejoMCP
from forgejo_mcp.servers.milestones import milestones_mcp
from forgejo_mcp.servers.pulls import pulls_mcp
from forgejo_mcp.servers.releases import releases_mcp
from forgejo_mcp.servers.repositories import repositories_mcp
from forgejo_mcp.servers.wiki import wiki_mcp

SUB_SERVERS = [
    issues_mcp,
    labels_mcp,
    milestones_mcp,
    releases_mcp,
    pulls_mcp,
    repositories_mcp,
    wiki_mcp,
    actions_mcp,
]


class FakeForgejoApi:
    """Answers requests by method and path; unknown routes get a 404."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status_code: int = 200, json=None) -> None:
        self.routes[(method, f"/api/v1{path}")] = (status_code, json)

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "route not found"})
        status_code, payload = route
        if payload is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake_api():
    return FakeForgejoApi()


@pytest.fixture
def fetcher(fake_api):
    config = ForgejoConfig(
        url="https://forgejo.example.com", token="server-token", server_version="9.0"
    )
    session = httpx.Client(transport=httpx.MockTransport(fake_api.handler))
    return ForgejoFetcher(config, session=session)


def build_test_mcp(app_context: MainAppContext) -> ForgejoMCP:
    @asynccontextmanager
    async def test_lifespan(app: FastMCP) -> AsyncGenerator[dict, None]:
        yield {"app_lifespan_context": app_context}

    test_mcp = ForgejoMCP(
        "TestForgejo", instructions="Test Forgejo MCP Server", lifespan=test_lifespan
    )
    for sub_server in SUB_SERVERS:
        test_mcp.mount(sub_server)
    return test_mcp


@pytest.fixture
def make_client(fetcher):
    """Factory for in-memory MCP clients with the given server settings."""

    def _make(**settings: Any) -> Client:
        settings.setdefault("forgejo_fetcher", fetcher)
        test_mcp = build_test_mcp(MainAppContext(**settings))
        return Client(transport=FastMCPTransport(test_mcp))

    return _make


@pytest.fixture
async def forgejo_client(make_client):
    async with make_client() as client:
        yield client


@pytest.fixture
async def read_only_client(make_client):
    async with make_client(read_only=True) as client:
        yield client
