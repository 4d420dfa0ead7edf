"""Repository FastMCP server instance and tool definitions."""

import logging
from typing import Annotated, Literal

from fastmcp import Context, FastMCP
from pydantic import Field

from forgejo_mcp.models import render_repositories
from forgejo_mcp.servers.dependencies import get_forgejo_fetcher
from forgejo_mcp.servers.params import DEFAULT_LIMIT, Limit, Owner, Page, Repo
from forgejo_mcp.utils.decorators import handle_forgejo_errors

logger = logging.getLogger("forgejo-mcp.server.repositories")

repositories_mcp = FastMCP(
    name="Forgejo Repositories Service",
    instructions="Provides tools for finding Forgejo repositories.",
)

_TAGS_READ = {"forgejo", "read", "toolset:repositories"}


@repositories_mcp.tool(
    name="search_repositories",
    tags=_TAGS_READ,
    annotations={"title": "Search Repositories", "readOnlyHint": True},
)
@handle_forgejo_errors("search repositories")
async def search_repositories(
    ctx: Context,
    q: Annotated[str, Field(description="Search keyword")],
    topic: Annotated[
        bool, Field(description="Match the keyword against repository topics only")
    ] = False,
    include_desc: Annotated[
        bool, Field(description="Also search in repository descriptions")
    ] = False,
    sort: Annotated[
        Literal["alpha", "created", "updated", "size", "id"] | None,
        Field(description="Sort field"),
    ] = None,
    order: Annotated[
        Literal["asc", "desc"] | None, Field(description="Sort direction")
    ] = None,
    page: Page = 1,
    limit: Limit = DEFAULT_LIMIT,
) -> str:
    """Search repositories visible to the authenticated user.

    Args:
        ctx: The FastMCP context.
        q: Search keyword.
        topic: Search topics only.
        include_desc: Include descriptions in the search.
        sort: Sort field.
        order: Sort direction.
        page: Page number.
        limit: Page size.

    Returns:
        Markdown list of matching repositories.
    """
    forgejo = await get_forgejo_fetcher(ctx)
    repositories = forgejo.repositories.search_repositories(
        q,
        topic=topic,
        include_desc=include_desc,
        sort=sort,
        order=order,
        page=page,
        limit=limit,
    )
    if not repositories:
        return "No repositories found matching the search criteria."
    return (
        f"Found {len(repositories)} repositories\n\n"
        f"{render_repositories(repositories)}"
    )


@repositories_mcp.tool(
    name="list_my_repositories",
    tags=_TAGS_READ,
    annotations={"title": "List My Repositories", "readOnlyHint": True},
)
@handle_forgejo_errors("list repositories")
async def list_my_repositories(
    ctx: Context, page: Page = 1, limit: Limit = DEFAULT_LIMIT
) -> str:
    """List repositories owned by the authenticated user."""
    forgejo = await get_forgejo_fetcher(ctx)
    repositories = forgejo.repositories.list_my_repositories(page=page, limit=limit)
    if not repositories:
        return "No repositories found for the authenticated user."
    return (
        f"Found {len(repositories)} repositories\n\n"
        f"{render_repositories(repositories)}"
    )


@repositories_mcp.tool(
    name="list_org_repositories",
    tags=_TAGS_READ,
    annotations={"title": "List Organization Repositories", "readOnlyHint": True},
)
@handle_forgejo_errors("list organization repositories")
async def list_org_repositories(
    ctx: Context,
    org: Annotated[str, Field(description="Organization name", min_length=1)],
    page: Page = 1,
    limit: Limit = DEFAULT_LIMIT,
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    repositories = forgejo.repositories.list_org_repositories(
        org, page=page, limit=limit
    )
    if not repositories:
        return f"No repositories found for organization '{org}'."
    return (
        f"Found {len(repositories)} repositories for organization '{org}'\n\n"
        f"{render_repositories(repositories)}"
    )


@repositories_mcp.tool(
    name="get_repository",
    tags=_TAGS_READ,
    annotations={"title": "Get Repository", "readOnlyHint": True},
)
@handle_forgejo_errors("get repository")
async def get_repository(ctx: Context, owner: Owner, repo: Repo) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    return forgejo.repositories.get_repository(owner, repo).to_markdown()
