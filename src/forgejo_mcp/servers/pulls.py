"""Pull request FastMCP server instance and tool definitions."""

import logging
from typing import Annotated, Literal

from fastmcp import Context, FastMCP
from pydantic import Field

from forgejo_mcp.models import render_pull_requests
from forgejo_mcp.servers.dependencies import get_forgejo_fetcher
from forgejo_mcp.servers.params import DEFAULT_LIMIT, Limit, Owner, Page, Repo
from forgejo_mcp.utils.date import parse_date_argument
from forgejo_mcp.utils.decorators import check_write_access, handle_forgejo_errors

logger = logging.getLogger("forgejo-mcp.server.pulls")

pulls_mcp = FastMCP(
    name="Forgejo Pull Requests Service",
    instructions="Provides tools for Forgejo pull requests.",
)

PullRequestSort = Literal[
    "oldest", "recentupdate", "leastupdate", "mostcomment", "leastcomment", "priority"
]


@pulls_mcp.tool(
    name="list_pull_requests",
    tags={"forgejo", "read", "toolset:pulls"},
    annotations={"title": "List Pull Requests", "readOnlyHint": True},
)
@handle_forgejo_errors("list pull requests")
async def list_pull_requests(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    state: Annotated[
        Literal["open", "closed", "all"],
        Field(description="Filter by pull request state"),
    ] = "open",
    sort: Annotated[
        PullRequestSort | None,
        Field(description="Sort order; newest first when omitted"),
    ] = None,
    milestone: Annotated[int | None, Field(description="Milestone ID")] = None,
    labels: Annotated[
        list[int] | None, Field(description="Label IDs the pull requests must carry")
    ] = None,
    page: Page = 1,
    limit: Limit = DEFAULT_LIMIT,
) -> str:
    """List pull requests of a repository.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        state: State filter.
        sort: Sort order.
        milestone: Milestone ID filter.
        labels: Label ID filter.
        page: Page number.
        limit: Page size.

    Returns:
        Markdown list of pull requests.
    """
    forgejo = await get_forgejo_fetcher(ctx)
    pull_requests = forgejo.pull_requests.list_pull_requests(
        owner,
        repo,
        state=state,
        sort=sort,
        milestone=milestone,
        labels=labels,
        page=page,
        limit=limit,
    )
    if not pull_requests:
        return "No pull requests found matching the criteria."
    return (
        f"Found {len(pull_requests)} pull requests\n\n"
        f"{render_pull_requests(pull_requests)}"
    )


@pulls_mcp.tool(
    name="get_pull_request",
    tags={"forgejo", "read", "toolset:pulls"},
    annotations={"title": "Get Pull Request", "readOnlyHint": True},
)
@handle_forgejo_errors("get pull request")
async def get_pull_request(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: Annotated[int, Field(description="Pull request number", ge=1)],
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    return forgejo.pull_requests.get_pull_request(owner, repo, index).to_markdown()


@pulls_mcp.tool(
    name="create_pull_request",
    tags={"forgejo", "write", "toolset:pulls"},
    annotations={"title": "Create Pull Request", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("create pull request")
async def create_pull_request(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    head: Annotated[
        str,
        Field(
            description=(
                "Branch with the changes, e.g. 'feature-x'. Use 'user:branch' "
                "for a branch of a fork."
            ),
            min_length=1,
        ),
    ],
    base: Annotated[
        str, Field(description="Branch to merge into, e.g. 'main'", min_length=1)
    ],
    title: Annotated[str, Field(description="Pull request title", min_length=1)],
    body: Annotated[str | None, Field(description="Description (Markdown)")] = None,
    assignees: Annotated[
        list[str] | None, Field(description="Usernames to assign")
    ] = None,
    milestone: Annotated[int | None, Field(description="Milestone ID")] = None,
    labels: Annotated[list[int] | None, Field(description="Label IDs")] = None,
    due_date: Annotated[
        str | None, Field(description="Due date, YYYY-MM-DD or RFC 3339")
    ] = None,
) -> str:
    """Open a pull request merging `head` into `base`."""
    forgejo = await get_forgejo_fetcher(ctx)
    pull_request = forgejo.pull_requests.create_pull_request(
        owner,
        repo,
        head=head,
        base=base,
        title=title,
        body=body,
        assignees=assignees,
        milestone=milestone,
        labels=labels,
        due_date=parse_date_argument(due_date, "due_date"),
    )
    return pull_request.to_markdown()
