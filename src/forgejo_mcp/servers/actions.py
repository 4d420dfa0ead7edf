"""Forgejo Actions FastMCP server instance and tool definitions."""

import logging
from typing import Annotated, Literal

from fastmcp import Context, FastMCP
from pydantic import Field

from forgejo_mcp.servers.dependencies import get_forgejo_fetcher
from forgejo_mcp.servers.params import DEFAULT_LIMIT, Limit, Owner, Page, Repo
from forgejo_mcp.utils.decorators import handle_forgejo_errors

logger = logging.getLogger("forgejo-mcp.server.actions")

actions_mcp = FastMCP(
    name="Forgejo Actions Service",
    instructions="Provides tools for inspecting Forgejo Actions runs.",
)

TaskStatus = Literal[
    "success", "failure", "cancelled", "skipped", "running", "waiting", "blocked"
]


@actions_mcp.tool(
    name="list_action_tasks",
    tags={"forgejo", "read", "toolset:actions"},
    annotations={"title": "List Action Tasks", "readOnlyHint": True},
)
@handle_forgejo_errors("list action tasks")
async def list_action_tasks(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    status: Annotated[TaskStatus | None, Field(description="Task status")] = None,
    workflow: Annotated[
        str | None, Field(description="Workflow file name, e.g. 'ci.yml'")
    ] = None,
    branch: Annotated[str | None, Field(description="Head branch name")] = None,
    event: Annotated[
        str | None,
        Field(description="Triggering event, e.g. 'push' or 'pull_request'"),
    ] = None,
    page: Page = 1,
    limit: Limit = DEFAULT_LIMIT,
) -> str:
    """List Forgejo Actions tasks (workflow runs) of a repository.

    The filters apply to the requested page only.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        status: Status filter.
        workflow: Workflow filter.
        branch: Branch filter.
        event: Event filter.
        page: Page number.
        limit: Page size.

    Returns:
        Markdown list of tasks with status, run number and duration.
    """
    forgejo = await get_forgejo_fetcher(ctx)
    tasks = forgejo.actions.list_tasks(
        owner,
        repo,
        status=status,
        workflow=workflow,
        branch=branch,
        event=event,
        page=page,
        limit=limit,
    )
    return (
        f"Found {len(tasks.workflow_runs)} action tasks "
        f"({tasks.total_count} in total)\n\n{tasks.to_markdown()}"
    )
