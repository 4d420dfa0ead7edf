"""Wiki FastMCP server instance and tool definitions."""

import logging
from typing import Annotated

from fastmcp import Context, FastMCP
from pydantic import Field

from forgejo_mcp.models import EMPTY_RESPONSE_MARKDOWN, render_wiki_pages
from forgejo_mcp.servers.dependencies import get_forgejo_fetcher
from forgejo_mcp.servers.params import Owner, Repo
from forgejo_mcp.utils.decorators import check_write_access, handle_forgejo_errors

logger = logging.getLogger("forgejo-mcp.server.wiki")

wiki_mcp = FastMCP(
    name="Forgejo Wiki Service",
    instructions="Provides tools for reading and editing Forgejo wiki pages.",
)

PageName = Annotated[
    str,
    Field(
        description="Wiki page name as listed by list_wiki_pages, e.g. 'Home'",
        min_length=1,
    ),
]
CommitMessage = Annotated[
    str | None, Field(description="Commit message for the wiki change")
]


@wiki_mcp.tool(
    name="list_wiki_pages",
    tags={"forgejo", "read", "toolset:wiki"},
    annotations={"title": "List Wiki Pages", "readOnlyHint": True},
)
@handle_forgejo_errors("list wiki pages")
async def list_wiki_pages(ctx: Context, owner: Owner, repo: Repo) -> str:
    """List all wiki pages of a repository."""
    forgejo = await get_forgejo_fetcher(ctx)
    return render_wiki_pages(forgejo.wiki.list_pages(owner, repo))


@wiki_mcp.tool(
    name="get_wiki_page",
    tags={"forgejo", "read", "toolset:wiki"},
    annotations={"title": "Get Wiki Page", "readOnlyHint": True},
)
@handle_forgejo_errors("get wiki page")
async def get_wiki_page(
    ctx: Context, owner: Owner, repo: Repo, page_name: PageName
) -> str:
    """Get a wiki page with its decoded content."""
    forgejo = await get_forgejo_fetcher(ctx)
    return forgejo.wiki.get_page(owner, repo, page_name).to_markdown()


@wiki_mcp.tool(
    name="create_wiki_page",
    tags={"forgejo", "write", "toolset:wiki"},
    annotations={"title": "Create Wiki Page", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("create wiki page")
async def create_wiki_page(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    title: Annotated[str, Field(description="Page title", min_length=1)],
    content: Annotated[str, Field(description="Page content (Markdown)")],
    message: CommitMessage = None,
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    page = forgejo.wiki.create_page(owner, repo, title, content, message=message)
    return page.to_markdown()


@wiki_mcp.tool(
    name="edit_wiki_page",
    tags={"forgejo", "write", "toolset:wiki"},
    annotations={"title": "Edit Wiki Page", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("edit wiki page")
async def edit_wiki_page(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    page_name: PageName,
    content: Annotated[str, Field(description="New page content (Markdown)")],
    title: Annotated[
        str | None, Field(description="New page title; renames the page")
    ] = None,
    message: CommitMessage = None,
) -> str:
    """Replace the content of a wiki page.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        page_name: Page to edit.
        content: New content.
        title: New title, keeps the current name when omitted.
        message: Commit message.

    Returns:
        Markdown of the updated page.
    """
    forgejo = await get_forgejo_fetcher(ctx)
    page = forgejo.wiki.edit_page(
        owner, repo, page_name, content, title=title, message=message
    )
    return page.to_markdown()


@wiki_mcp.tool(
    name="delete_wiki_page",
    tags={"forgejo", "write", "toolset:wiki"},
    annotations={
        "title": "Delete Wiki Page",
        "readOnlyHint": False,
        "destructiveHint": True,
    },
)
@check_write_access
@handle_forgejo_errors("delete wiki page")
async def delete_wiki_page(
    ctx: Context, owner: Owner, repo: Repo, page_name: PageName
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    forgejo.wiki.delete_page(owner, repo, page_name)
    return EMPTY_RESPONSE_MARKDOWN
