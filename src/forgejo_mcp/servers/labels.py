"""Label FastMCP server instance and tool definitions."""

import logging
from typing import Annotated

from fastmcp import Context, FastMCP
from pydantic import Field

from forgejo_mcp.models import EMPTY_RESPONSE_MARKDOWN, render_labels
from forgejo_mcp.servers.dependencies import get_forgejo_fetcher
from forgejo_mcp.servers.params import DEFAULT_LIMIT, Limit, Owner, Page, Repo
from forgejo_mcp.utils.decorators import check_write_access, handle_forgejo_errors

logger = logging.getLogger("forgejo-mcp.server.labels")

labels_mcp = FastMCP(
    name="Forgejo Labels Service",
    instructions="Provides tools for managing Forgejo repository labels.",
)

LABEL_COLOR_PATTERN = r"^#?[0-9a-fA-F]{6}$"

LabelId = Annotated[int, Field(description="Label ID", ge=1)]


@labels_mcp.tool(
    name="list_repo_labels",
    tags={"forgejo", "read", "toolset:labels"},
    annotations={"title": "List Repository Labels", "readOnlyHint": True},
)
@handle_forgejo_errors("list labels")
async def list_repo_labels(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    page: Page = 1,
    limit: Limit = DEFAULT_LIMIT,
) -> str:
    """List the labels defined in a repository."""
    forgejo = await get_forgejo_fetcher(ctx)
    labels = forgejo.labels.list_labels(owner, repo, page=page, limit=limit)
    return f"Found {len(labels)} labels\n\n{render_labels(labels)}"


@labels_mcp.tool(
    name="create_label",
    tags={"forgejo", "write", "toolset:labels"},
    annotations={"title": "Create Label", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("create label")
async def create_label(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    name: Annotated[str, Field(description="Label name", min_length=1)],
    color: Annotated[
        str,
        Field(
            description="Hex color code, e.g. '#e11d21' or 'e11d21'",
            pattern=LABEL_COLOR_PATTERN,
        ),
    ],
    description: Annotated[
        str | None, Field(description="Label description")
    ] = None,
) -> str:
    """Create a label in a repository.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        name: Label name.
        color: Hex color code.
        description: Optional description.

    Returns:
        Markdown of the created label.
    """
    forgejo = await get_forgejo_fetcher(ctx)
    label = forgejo.labels.create_label(
        owner, repo, name=name, color=color, description=description
    )
    return label.to_markdown()


@labels_mcp.tool(
    name="edit_label",
    tags={"forgejo", "write", "toolset:labels"},
    annotations={"title": "Edit Label", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("edit label")
async def edit_label(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    id: LabelId,
    name: Annotated[str | None, Field(description="New label name")] = None,
    color: Annotated[
        str | None,
        Field(description="New hex color code", pattern=LABEL_COLOR_PATTERN),
    ] = None,
    description: Annotated[
        str | None, Field(description="New label description")
    ] = None,
) -> str:
    """Edit a label. Only the given fields are changed."""
    forgejo = await get_forgejo_fetcher(ctx)
    label = forgejo.labels.edit_label(
        owner, repo, id, name=name, color=color, description=description
    )
    return label.to_markdown()


@labels_mcp.tool(
    name="delete_label",
    tags={"forgejo", "write", "toolset:labels"},
    annotations={
        "title": "Delete Label",
        "readOnlyHint": False,
        "destructiveHint": True,
    },
)
@check_write_access
@handle_forgejo_errors("delete label")
async def delete_label(ctx: Context, owner: Owner, repo: Repo, id: LabelId) -> str:
    """Delete a label. It is removed from every issue carrying it."""
    forgejo = await get_forgejo_fetcher(ctx)
    forgejo.labels.delete_label(owner, repo, id)
    return EMPTY_RESPONSE_MARKDOWN
