"""Main FastMCP server setup for the Forgejo integration."""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any, Literal, Optional

import mcp.types as mt
from fastmcp import FastMCP
from fastmcp.server.middleware import CallNext, MiddlewareContext
from fastmcp.server.middleware import Middleware as MCPMiddleware
from fastmcp.tools import Tool as FastMCPTool
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from forgejo_mcp.exceptions import ForgejoApiError
from forgejo_mcp.forgejo import ForgejoFetcher
from forgejo_mcp.forgejo.config import ForgejoConfig
from forgejo_mcp.utils.io import is_read_only_mode
from forgejo_mcp.utils.logging import mask_sensitive
from forgejo_mcp.utils.tools import get_enabled_tools, should_include_tool
from forgejo_mcp.utils.toolsets import (
    get_enabled_toolsets,
    should_include_tool_by_toolset,
)

from .actions import actions_mcp
from .context import MainAppContext
from .dependencies import user_fetcher_cache
from .issues import issues_mcp
from .labels import labels_mcp
from .milestones import milestones_mcp
from .pulls import pulls_mcp
from .releases import releases_mcp
from .repositories import repositories_mcp
from .wiki import wiki_mcp

logger = logging.getLogger("forgejo-mcp.server.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def should_expose_tool(
    tool_name: str,
    tool_tags: set[str],
    read_only: bool,
    enabled_tools: list[str] | None,
    enabled_toolsets: set[str] | None,
) -> bool:
    """Decide whether a registered tool is listed to MCP clients.

    Args:
        tool_name: Registered tool name
        tool_tags: Tags of the tool
        read_only: Hide tools tagged "write"
        enabled_tools: ENABLED_TOOLS filter, None for all tools
        enabled_toolsets: TOOLSETS filter, None for all toolsets

    Returns:
        True if the tool passes every filter
    """
    if not should_include_tool(tool_name, enabled_tools):
        return False
    if not should_include_tool_by_toolset(tool_tags, enabled_toolsets):
        return False
    return not (read_only and "write" in tool_tags)


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    logger.info("Main Forgejo MCP server lifespan starting...")
    read_only = is_read_only_mode()
    enabled_tools = get_enabled_tools()
    enabled_toolsets = get_enabled_toolsets()

    fetcher: ForgejoFetcher | None = None
    try:
        config = ForgejoConfig.from_env()
        fetcher = ForgejoFetcher(config=config)
        logger.info(
            f"Forgejo configuration loaded for {config.url} "
            f"(token: {mask_sensitive(config.token)})"
        )
    except ValueError as e:
        logger.error(f"Forgejo configuration is not usable: {e}")

    if fetcher is not None:
        try:
            logger.info(f"Forgejo server version: {fetcher.get_server_version()}")
        except ForgejoApiError as e:
            logger.warning(f"Could not determine Forgejo server version: {e}")

    app_context = MainAppContext(
        forgejo_fetcher=fetcher,
        read_only=read_only,
        enabled_tools=enabled_tools,
        enabled_toolsets=enabled_toolsets,
    )
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
    logger.info(f"Enabled tools filter: {enabled_tools or 'All tools enabled'}")

    try:
        yield {"app_lifespan_context": app_context}
    finally:
        if fetcher is not None:
            logger.debug("Closing Forgejo HTTP session...")
            fetcher.close()
        if user_fetcher_cache:
            logger.debug(f"Closing {len(user_fetcher_cache)} per-user HTTP sessions...")
            user_fetcher_cache.clear()
        logger.info("Main Forgejo MCP server lifespan shutdown complete.")


class ToolVisibilityMiddleware(MCPMiddleware):
    """Hides tools excluded by read-only mode, ENABLED_TOOLS or TOOLSETS."""

    async def on_list_tools(
        self,
        context: MiddlewareContext[mt.ListToolsRequest],
        call_next: CallNext[mt.ListToolsRequest, Sequence[FastMCPTool]],
    ) -> Sequence[FastMCPTool]:
        tools = await call_next(context)
        read_only, enabled_tools, enabled_toolsets = _visibility_settings(context)
        logger.debug(f"Aggregated {len(tools)} tools before filtering")

        filtered_tools: list[FastMCPTool] = []
        for tool in tools:
            if not should_expose_tool(
                tool.name, tool.tags, read_only, enabled_tools, enabled_toolsets
            ):
                logger.debug(f"Excluding tool '{tool.name}'")
                continue
            filtered_tools.append(tool)

        logger.debug(f"Listing {len(filtered_tools)} tools after filtering")
        return filtered_tools


def _visibility_settings(
    context: MiddlewareContext,
) -> tuple[bool, list[str] | None, set[str] | None]:
    # Filters come from the lifespan context, or the environment without one.
    app_lifespan_state: MainAppContext | None = None
    if context.fastmcp_context is not None:
        try:
            request_context = context.fastmcp_context.request_context
            lifespan_ctx_dict = request_context.lifespan_context  # type: ignore
        except (LookupError, AttributeError):
            lifespan_ctx_dict = None
        if isinstance(lifespan_ctx_dict, dict):
            app_lifespan_state = lifespan_ctx_dict.get("app_lifespan_context")

    if app_lifespan_state is None:
        logger.warning("Lifespan context not available, using tool filters from env.")
        return is_read_only_mode(), get_enabled_tools(), get_enabled_toolsets()
    return (
        app_lifespan_state.read_only,
        app_lifespan_state.enabled_tools,
        app_lifespan_state.enabled_toolsets,
    )


class ForgejoMCP(FastMCP[MainAppContext]):
    """Custom FastMCP server class for Forgejo with tool filtering."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.add_middleware(ToolVisibilityMiddleware())

    def http_app(
        self,
        path: str | None = None,
        middleware: list[Middleware] | None = None,
        transport: Literal["streamable-http", "sse"] = "streamable-http",
    ) -> "Starlette":
        user_token_mw = Middleware(UserTokenMiddleware, mcp_server_ref=self)
        final_middleware_list = [user_token_mw]
        if middleware:
            final_middleware_list.extend(middleware)
        return super().http_app(
            path=path, middleware=final_middleware_list, transport=transport
        )


class UserTokenMiddleware(BaseHTTPMiddleware):
    """Middleware to extract per-user Forgejo tokens from Authorization headers.

    Accepts ``Bearer <token>`` and ``token <token>``; the token is stored on
    ``request.state.user_forgejo_token``.
    """

    def __init__(self, app: Any, mcp_server_ref: Optional["ForgejoMCP"] = None) -> None:
        super().__init__(app)
        self.mcp_server_ref = mcp_server_ref

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        auth_header = request.headers.get("Authorization")
        request.state.user_forgejo_token = None

        if auth_header:
            scheme, _, credentials = auth_header.partition(" ")
            token = credentials.strip()
            if scheme.lower() not in ("bearer", "token"):
                logger.warning(
                    f"Unsupported Authorization type for {request.url.path}: {scheme}"
                )
                return JSONResponse(
                    {
                        "error": "Unauthorized: Only 'Bearer <token>' or "
                        "'token <token>' types are supported."
                    },
                    status_code=401,
                )
            if not token:
                return JSONResponse(
                    {"error": f"Unauthorized: Empty {scheme} token"},
                    status_code=401,
                )
            logger.debug(
                f"UserTokenMiddleware: {scheme} token extracted "
                f"(masked): {mask_sensitive(token)}"
            )
            request.state.user_forgejo_token = token

        return await call_next(request)


main_mcp = ForgejoMCP(name="Forgejo MCP", lifespan=main_lifespan)
main_mcp.mount(issues_mcp)
main_mcp.mount(labels_mcp)
main_mcp.mount(milestones_mcp)
main_mcp.mount(releases_mcp)
main_mcp.mount(pulls_mcp)
main_mcp.mount(repositories_mcp)
main_mcp.mount(wiki_mcp)
main_mcp.mount(actions_mcp)


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)
