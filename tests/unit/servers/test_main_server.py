"""Tests for the main MCP server implementation."""

from unittest.mock import patch

import httpx
import pytest
from fastmcp import Client
from fastmcp.client import FastMCPTransport
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from forgejo_mcp.forgejo import ForgejoFetcher
from forgejo_mcp.servers.dependencies import user_fetcher_cache
from forgejo_mcp.servers.main import (
    UserTokenMiddleware,
    main_lifespan,
    main_mcp,
    should_expose_tool,
)

WIKI_TOOLS = {
    "list_wiki_pages",
    "get_wiki_page",
    "create_wiki_page",
    "edit_wiki_page",
    "delete_wiki_page",
}


@pytest.mark.anyio
async def test_run_server_invalid_transport():
    with pytest.raises(ValueError) as excinfo:
        await main_mcp.run_async(transport="invalid")  # type: ignore
    assert "invalid" in str(excinfo.value)


@pytest.mark.anyio
async def test_run_server_sse():
    with patch.object(main_mcp, "run_async") as mock_run_async:
        mock_run_async.return_value = None
        await main_mcp.run_async(transport="sse", port=9000)
        mock_run_async.assert_called_once_with(transport="sse", port=9000)


@pytest.mark.anyio
@pytest.mark.parametrize("transport", ["sse", "streamable-http"])
async def test_health_check_endpoint(transport):
    app = main_mcp.http_app(transport=transport)
    transport_ = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport_, base_url="http://test"
    ) as client:
        response = await client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_main_server_registers_every_tool():
    tools = await main_mcp.get_tools()
    assert len(tools) == 50
    write_tools = {name for name, tool in tools.items() if "write" in tool.tags}
    read_tools = {name for name, tool in tools.items() if "read" in tool.tags}
    assert len(write_tools) == 31
    assert len(read_tools) == 19
    assert "create_issue" in write_tools
    assert "list_action_tasks" in read_tools
    assert all(name == tool.name for name, tool in tools.items())


class TestShouldExposeTool:
    @pytest.mark.parametrize(
        "read_only, enabled_tools, enabled_toolsets, tags, expected",
        [
            pytest.param(False, None, None, {"write"}, True, id="no_filters"),
            pytest.param(True, None, None, {"write"}, False, id="read_only_write"),
            pytest.param(True, None, None, {"read"}, True, id="read_only_read"),
            pytest.param(False, ["other"], None, {"read"}, False, id="not_enabled"),
            pytest.param(
                False, None, {"wiki"}, {"toolset:issues"}, False, id="toolset_off"
            ),
            pytest.param(
                False,
                ["get_issue"],
                {"issues"},
                {"toolset:issues"},
                True,
                id="all_pass",
            ),
        ],
    )
    def test_filters(self, read_only, enabled_tools, enabled_toolsets, tags, expected):
        assert (
            should_expose_tool(
                "get_issue", tags, read_only, enabled_tools, enabled_toolsets
            )
            is expected
        )


class TestToolListing:
    @pytest.mark.anyio
    async def test_lists_all_tools_without_filters(self, make_client):
        async with make_client() as client:
            tools = await client.list_tools()
        assert len(tools) == 50

    @pytest.mark.anyio
    async def test_read_only_hides_write_tools(self, make_client):
        async with make_client(read_only=True) as client:
            names = {tool.name for tool in await client.list_tools()}
        assert len(names) == 19
        assert "get_issue" in names
        assert "create_issue" not in names
        assert "delete_wiki_page" not in names

    @pytest.mark.anyio
    async def test_toolset_filter(self, make_client):
        async with make_client(enabled_toolsets={"wiki"}) as client:
            names = {tool.name for tool in await client.list_tools()}
        assert names == WIKI_TOOLS

    @pytest.mark.anyio
    async def test_enabled_tools_combined_with_read_only(self, make_client):
        async with make_client(
            read_only=True, enabled_tools=["get_issue", "create_issue"]
        ) as client:
            names = [tool.name for tool in await client.list_tools()]
        assert names == ["get_issue"]


class TestMainLifespan:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "FORGEJO_URL",
            "FORGEJO_TOKEN",
            "FORGEJO_VERSION",
            "FORGEJO_TIMEOUT",
            "READ_ONLY_MODE",
            "ENABLED_TOOLS",
            "TOOLSETS",
        ):
            monkeypatch.delenv(name, raising=False)

    @pytest.mark.anyio
    async def test_builds_fetcher_from_environment(self, monkeypatch):
        monkeypatch.setenv("FORGEJO_URL", "https://codeberg.org/")
        monkeypatch.setenv("FORGEJO_TOKEN", "abc123")
        monkeypatch.setenv("FORGEJO_VERSION", "9.0.0")
        monkeypatch.setenv("READ_ONLY_MODE", "true")
        monkeypatch.setenv("TOOLSETS", "wiki")

        async with main_lifespan(main_mcp) as state:
            app_context = state["app_lifespan_context"]
            assert app_context.read_only is True
            assert app_context.enabled_toolsets == {"wiki"}
            assert app_context.enabled_tools is None
            fetcher = app_context.forgejo_fetcher
            assert fetcher.config.url == "https://codeberg.org"
            assert fetcher.config.token == "abc123"

        assert fetcher.client.session.is_closed

    @pytest.mark.anyio
    async def test_missing_url_leaves_fetcher_unset(self):
        async with main_lifespan(main_mcp) as state:
            app_context = state["app_lifespan_context"]
            assert app_context.forgejo_fetcher is None
            assert app_context.read_only is False

    @pytest.mark.anyio
    async def test_unreachable_server_does_not_stop_startup(self, monkeypatch):
        monkeypatch.setenv("FORGEJO_URL", "http://127.0.0.1:9")
        monkeypatch.setenv("FORGEJO_TIMEOUT", "0.5")

        async with main_lifespan(main_mcp) as state:
            assert state["app_lifespan_context"].forgejo_fetcher is not None

    @pytest.mark.anyio
    async def test_closes_cached_user_fetchers(self, monkeypatch):
        monkeypatch.setenv("FORGEJO_URL", "https://codeberg.org")
        monkeypatch.setenv("FORGEJO_VERSION", "9.0.0")

        async with main_lifespan(main_mcp) as state:
            shared = state["app_lifespan_context"].forgejo_fetcher
            user_fetcher = ForgejoFetcher(shared.config.with_token("user-token"))
            user_fetcher_cache["digest"] = user_fetcher

        assert user_fetcher.client.session.is_closed
        assert len(user_fetcher_cache) == 0


class TestMainServerToolVisibility:
    """Filters from the environment apply to tools/list on the main server."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("FORGEJO_URL", "READ_ONLY_MODE", "ENABLED_TOOLS", "TOOLSETS"):
            monkeypatch.delenv(name, raising=False)

    async def _list_names(self) -> set[str]:
        async with Client(transport=FastMCPTransport(main_mcp)) as client:
            return {tool.name for tool in await client.list_tools()}

    @pytest.mark.anyio
    async def test_read_only_mode_hides_write_tools(self, monkeypatch):
        monkeypatch.setenv("READ_ONLY_MODE", "true")
        names = await self._list_names()
        assert len(names) == 19
        assert "create_issue" not in names
        assert "get_issue" in names

    @pytest.mark.anyio
    async def test_toolsets_and_enabled_tools(self, monkeypatch):
        monkeypatch.setenv("TOOLSETS", "wiki,actions")
        monkeypatch.setenv("ENABLED_TOOLS", "get_wiki_page,list_action_tasks,get_issue")
        assert await self._list_names() == {"get_wiki_page", "list_action_tasks"}

    @pytest.mark.anyio
    async def test_no_filters_lists_every_tool(self):
        assert len(await self._list_names()) == 50


async def _echo_token(request: Request) -> JSONResponse:
    return JSONResponse({"token": request.state.user_forgejo_token})


@pytest.fixture
def middleware_app():
    return Starlette(
        routes=[Route("/mcp", _echo_token, methods=["POST"])],
        middleware=[Middleware(UserTokenMiddleware)],
    )


class TestUserTokenMiddleware:
    async def _post(self, app, headers=None):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(
            transport=transport, base_url="http://test"
        ) as client:
            return await client.post("/mcp", headers=headers or {})

    @pytest.mark.anyio
    async def test_no_header_passes_through(self, middleware_app):
        response = await self._post(middleware_app)
        assert response.status_code == 200
        assert response.json() == {"token": None}

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "header", ["Bearer user-token", "token user-token", "bearer  user-token "]
    )
    async def test_token_is_stored(self, middleware_app, header):
        response = await self._post(middleware_app, {"Authorization": header})
        assert response.status_code == 200
        assert response.json() == {"token": "user-token"}

    @pytest.mark.anyio
    async def test_unsupported_scheme(self, middleware_app):
        response = await self._post(
            middleware_app, {"Authorization": "Basic dXNlcjpwYXNz"}
        )
        assert response.status_code == 401
        assert response.json() == {
            "error": "Unauthorized: Only 'Bearer <token>' or 'token <token>' "
            "types are supported."
        }

    @pytest.mark.anyio
    async def test_empty_token(self, middleware_app):
        response = await self._post(middleware_app, {"Authorization": "Bearer "})
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized: Empty Bearer token"}
