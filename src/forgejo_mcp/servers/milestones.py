"""Milestone FastMCP server instance and tool definitions."""

import logging
from typing import Annotated, Literal

from fastmcp import Context, FastMCP
from pydantic import Field

from forgejo_mcp.models import EMPTY_RESPONSE_MARKDOWN, render_milestones
from forgejo_mcp.servers.dependencies import get_forgejo_fetcher
from forgejo_mcp.servers.params import DEFAULT_LIMIT, Limit, Owner, Page, Repo
from forgejo_mcp.utils.date import parse_date_argument
from forgejo_mcp.utils.decorators import check_write_access, handle_forgejo_errors

logger = logging.getLogger("forgejo-mcp.server.milestones")

milestones_mcp = FastMCP(
    name="Forgejo Milestones Service",
    instructions="Provides tools for managing Forgejo milestones.",
)

MilestoneId = Annotated[int, Field(description="Milestone ID", ge=1)]
DueDate = Annotated[
    str | None,
    Field(description="Due date, YYYY-MM-DD or RFC 3339, e.g. '2024-12-31'"),
]


@milestones_mcp.tool(
    name="list_repo_milestones",
    tags={"forgejo", "read", "toolset:milestones"},
    annotations={"title": "List Repository Milestones", "readOnlyHint": True},
)
@handle_forgejo_errors("list milestones")
async def list_repo_milestones(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    state: Annotated[
        Literal["open", "closed", "all"],
        Field(description="Filter by milestone state"),
    ] = "open",
    name: Annotated[str | None, Field(description="Filter by milestone name")] = None,
    page: Page = 1,
    limit: Limit = DEFAULT_LIMIT,
) -> str:
    """List the milestones of a repository with their progress."""
    forgejo = await get_forgejo_fetcher(ctx)
    milestones = forgejo.milestones.list_milestones(
        owner, repo, state=state, name=name, page=page, limit=limit
    )
    return f"Found {len(milestones)} milestones\n\n{render_milestones(milestones)}"


@milestones_mcp.tool(
    name="create_milestone",
    tags={"forgejo", "write", "toolset:milestones"},
    annotations={"title": "Create Milestone", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("create milestone")
async def create_milestone(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    title: Annotated[str, Field(description="Milestone title", min_length=1)],
    description: Annotated[
        str | None, Field(description="Milestone description")
    ] = None,
    due_date: DueDate = None,
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    milestone = forgejo.milestones.create_milestone(
        owner,
        repo,
        title=title,
        description=description,
        due_on=parse_date_argument(due_date, "due_date"),
    )
    return milestone.to_markdown()


@milestones_mcp.tool(
    name="edit_milestone",
    tags={"forgejo", "write", "toolset:milestones"},
    annotations={"title": "Edit Milestone", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("edit milestone")
async def edit_milestone(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    id: MilestoneId,
    title: Annotated[str | None, Field(description="New title")] = None,
    description: Annotated[
        str | None, Field(description="New description")
    ] = None,
    due_date: DueDate = None,
    state: Annotated[
        Literal["open", "closed"] | None,
        Field(description="New state; 'closed' closes the milestone"),
    ] = None,
) -> str:
    """Edit a milestone. Only the given fields are changed.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        id: Milestone ID.
        title: New title.
        description: New description.
        due_date: New due date.
        state: New state.

    Returns:
        Markdown of the updated milestone.
    """
    forgejo = await get_forgejo_fetcher(ctx)
    milestone = forgejo.milestones.edit_milestone(
        owner,
        repo,
        id,
        title=title,
        description=description,
        due_on=parse_date_argument(due_date, "due_date"),
        state=state,
    )
    return milestone.to_markdown()


@milestones_mcp.tool(
    name="delete_milestone",
    tags={"forgejo", "write", "toolset:milestones"},
    annotations={
        "title": "Delete Milestone",
        "readOnlyHint": False,
        "destructiveHint": True,
    },
)
@check_write_access
@handle_forgejo_errors("delete milestone")
async def delete_milestone(
    ctx: Context, owner: Owner, repo: Repo, id: MilestoneId
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    forgejo.milestones.delete_milestone(owner, repo, id)
    return EMPTY_RESPONSE_MARKDOWN
