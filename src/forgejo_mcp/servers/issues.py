"""Issue FastMCP server instance and tool definitions.

Covers issues, issue comments, issue labels, issue attachments and issue
dependencies.
"""

import logging
from typing import Annotated, Literal

from fastmcp import Context, FastMCP
from pydantic import Field

from forgejo_mcp.models import (
    EMPTY_RESPONSE_MARKDOWN,
    render_attachments,
    render_issue_list,
    render_labels,
)
from forgejo_mcp.servers.dependencies import get_forgejo_fetcher
from forgejo_mcp.servers.params import (
    DEFAULT_LIMIT,
    IssueIndex,
    Limit,
    Owner,
    Page,
    Repo,
)
from forgejo_mcp.utils.date import parse_date_argument
from forgejo_mcp.utils.decorators import check_write_access, handle_forgejo_errors

logger = logging.getLogger("forgejo-mcp.server.issues")

issues_mcp = FastMCP(
    name="Forgejo Issues Service",
    instructions="Provides tools for Forgejo issues and their comments.",
)

_TAGS_READ = {"forgejo", "read", "toolset:issues"}
_TAGS_WRITE = {"forgejo", "write", "toolset:issues"}

AttachmentId = Annotated[int, Field(description="Attachment ID", ge=1)]


def _split_csv(value: str | None) -> list[str] | None:
    if not value:
        return None
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or None


# Issues


@issues_mcp.tool(
    name="list_repo_issues",
    tags=_TAGS_READ,
    annotations={"title": "List Repository Issues", "readOnlyHint": True},
)
@handle_forgejo_errors("list issues")
async def list_repo_issues(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    state: Annotated[
        Literal["open", "closed", "all"],
        Field(description="Filter by issue state"),
    ] = "open",
    labels: Annotated[
        str | None,
        Field(description="Comma-separated label names, e.g. 'bug,ui'"),
    ] = None,
    milestones: Annotated[
        str | None,
        Field(description="Comma-separated milestone names or IDs"),
    ] = None,
    assignee: Annotated[
        str | None,
        Field(description="Only issues assigned to this username"),
    ] = None,
    q: Annotated[str | None, Field(description="Search keyword")] = None,
    page: Page = 1,
    limit: Limit = DEFAULT_LIMIT,
) -> str:
    """List issues of a repository. Pull requests are not included.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        state: Issue state filter.
        labels: Comma-separated label names.
        milestones: Comma-separated milestone names or IDs.
        assignee: Assignee username.
        q: Search keyword.
        page: Page number.
        limit: Page size.

    Returns:
        Markdown list of the matching issues.
    """
    forgejo = await get_forgejo_fetcher(ctx)
    issues = forgejo.issues.list_issues(
        owner,
        repo,
        state=state,
        labels=_split_csv(labels),
        milestones=_split_csv(milestones),
        assigned_by=assignee,
        q=q,
        page=page,
        limit=limit,
    )
    return f"Found {len(issues)} issues\n\n{render_issue_list(issues)}"


@issues_mcp.tool(
    name="get_issue",
    tags=_TAGS_READ,
    annotations={"title": "Get Issue", "readOnlyHint": True},
)
@handle_forgejo_errors("get issue")
async def get_issue(ctx: Context, owner: Owner, repo: Repo, index: IssueIndex) -> str:
    """Get the details of one issue."""
    forgejo = await get_forgejo_fetcher(ctx)
    return forgejo.issues.get_issue(owner, repo, index).to_markdown()


@issues_mcp.tool(
    name="create_issue",
    tags=_TAGS_WRITE,
    annotations={"title": "Create Issue", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("create issue")
async def create_issue(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    title: Annotated[str, Field(description="Issue title", min_length=1)],
    body: Annotated[str | None, Field(description="Issue body (Markdown)")] = None,
    assignees: Annotated[
        list[str] | None, Field(description="Usernames to assign")
    ] = None,
    milestone: Annotated[
        int | None, Field(description="Milestone ID to attach the issue to")
    ] = None,
    labels: Annotated[list[int] | None, Field(description="Label IDs")] = None,
    due_date: Annotated[
        str | None,
        Field(description="Due date, YYYY-MM-DD or RFC 3339, e.g. '2024-12-31'"),
    ] = None,
) -> str:
    """Create a new issue.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        title: Issue title.
        body: Issue description.
        assignees: Usernames to assign.
        milestone: Milestone ID.
        labels: Label IDs.
        due_date: Due date.

    Returns:
        Markdown of the created issue.

    Raises:
        ToolError: If the due date is invalid or the server rejects the issue.
    """
    forgejo = await get_forgejo_fetcher(ctx)
    issue = forgejo.issues.create_issue(
        owner,
        repo,
        title=title,
        body=body,
        assignees=assignees,
        milestone=milestone,
        labels=labels,
        due_date=parse_date_argument(due_date, "due_date"),
    )
    return issue.to_markdown()


@issues_mcp.tool(
    name="edit_issue",
    tags=_TAGS_WRITE,
    annotations={"title": "Edit Issue", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("edit issue")
async def edit_issue(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    title: Annotated[str | None, Field(description="New title")] = None,
    body: Annotated[str | None, Field(description="New body (Markdown)")] = None,
    state: Annotated[
        Literal["open", "closed"] | None, Field(description="New state")
    ] = None,
    assignees: Annotated[
        list[str] | None,
        Field(description="Usernames to assign, replacing the current assignees"),
    ] = None,
    milestone: Annotated[int | None, Field(description="Milestone ID")] = None,
    due_date: Annotated[
        str | None, Field(description="Due date, YYYY-MM-DD or RFC 3339")
    ] = None,
) -> str:
    """Edit an issue. Only the given fields are changed."""
    forgejo = await get_forgejo_fetcher(ctx)
    issue = forgejo.issues.edit_issue(
        owner,
        repo,
        index,
        title=title,
        body=body,
        state=state,
        assignees=assignees,
        milestone=milestone,
        due_date=parse_date_argument(due_date, "due_date"),
    )
    return issue.to_markdown()


# Issue labels


@issues_mcp.tool(
    name="add_issue_labels",
    tags=_TAGS_WRITE,
    annotations={"title": "Add Issue Labels", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("add labels")
async def add_issue_labels(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    labels: Annotated[
        list[int], Field(description="Label IDs to add", min_length=1)
    ],
) -> str:
    """Add labels to an issue, keeping its existing labels."""
    forgejo = await get_forgejo_fetcher(ctx)
    current = forgejo.issues.add_labels(owner, repo, index, labels)
    return f"Labels on issue #{index}\n\n{render_labels(current)}"


@issues_mcp.tool(
    name="remove_issue_label",
    tags=_TAGS_WRITE,
    annotations={
        "title": "Remove Issue Label",
        "readOnlyHint": False,
        "idempotentHint": True,
    },
)
@check_write_access
@handle_forgejo_errors("remove label")
async def remove_issue_label(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    label: Annotated[int, Field(description="Label ID to remove", ge=1)],
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    forgejo.issues.remove_label(owner, repo, index, label)
    return EMPTY_RESPONSE_MARKDOWN


@issues_mcp.tool(
    name="replace_issue_labels",
    tags=_TAGS_WRITE,
    annotations={
        "title": "Replace Issue Labels",
        "readOnlyHint": False,
        "idempotentHint": True,
    },
)
@check_write_access
@handle_forgejo_errors("replace labels")
async def replace_issue_labels(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    labels: Annotated[
        list[int],
        Field(description="Label IDs the issue should carry; empty clears all"),
    ],
) -> str:
    """Replace all labels of an issue."""
    forgejo = await get_forgejo_fetcher(ctx)
    current = forgejo.issues.replace_labels(owner, repo, index, labels)
    return f"Labels on issue #{index}\n\n{render_labels(current)}"


# Comments


@issues_mcp.tool(
    name="list_issue_comments",
    tags=_TAGS_READ,
    annotations={"title": "List Issue Comments", "readOnlyHint": True},
)
@handle_forgejo_errors("list comments")
async def list_issue_comments(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    since: Annotated[
        str | None,
        Field(description="Only comments updated at or after this time (RFC 3339)"),
    ] = None,
    before: Annotated[
        str | None,
        Field(description="Only comments updated before this time (RFC 3339)"),
    ] = None,
    page: Page = 1,
    limit: Limit = DEFAULT_LIMIT,
) -> str:
    """List the comments of an issue, oldest first."""
    forgejo = await get_forgejo_fetcher(ctx)
    comments = forgejo.comments.list_comments(
        owner,
        repo,
        index,
        since=parse_date_argument(since, "since"),
        before=parse_date_argument(before, "before"),
        page=page,
        limit=limit,
    )
    if not comments:
        return "No comments found for this issue."
    rendered = "".join(f"{comment.to_markdown()}\n\n---\n\n" for comment in comments)
    return f"Found {len(comments)} comments\n\n{rendered}"


@issues_mcp.tool(
    name="create_issue_comment",
    tags=_TAGS_WRITE,
    annotations={"title": "Create Issue Comment", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("create comment")
async def create_issue_comment(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    body: Annotated[str, Field(description="Comment text (Markdown)", min_length=1)],
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    return forgejo.comments.create_comment(owner, repo, index, body).to_markdown()


@issues_mcp.tool(
    name="edit_issue_comment",
    tags=_TAGS_WRITE,
    annotations={"title": "Edit Issue Comment", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("edit comment")
async def edit_issue_comment(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    comment_id: Annotated[int, Field(description="Comment ID", ge=1)],
    body: Annotated[str, Field(description="New comment text", min_length=1)],
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    return forgejo.comments.edit_comment(owner, repo, comment_id, body).to_markdown()


@issues_mcp.tool(
    name="delete_issue_comment",
    tags=_TAGS_WRITE,
    annotations={
        "title": "Delete Issue Comment",
        "readOnlyHint": False,
        "destructiveHint": True,
    },
)
@check_write_access
@handle_forgejo_errors("delete comment")
async def delete_issue_comment(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    comment_id: Annotated[int, Field(description="Comment ID", ge=1)],
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    forgejo.comments.delete_comment(owner, repo, comment_id)
    return f"Comment {comment_id} successfully deleted."


# Attachments


@issues_mcp.tool(
    name="list_issue_attachments",
    tags=_TAGS_READ,
    annotations={"title": "List Issue Attachments", "readOnlyHint": True},
)
@handle_forgejo_errors("list attachments")
async def list_issue_attachments(
    ctx: Context, owner: Owner, repo: Repo, index: IssueIndex
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    attachments = forgejo.attachments.list_attachments(owner, repo, "issues", index)
    if not attachments:
        return "No attachments found for this issue."
    return f"Found {len(attachments)} attachments\n\n{render_attachments(attachments)}"


@issues_mcp.tool(
    name="create_issue_attachment",
    tags=_TAGS_WRITE,
    annotations={"title": "Create Issue Attachment", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("create attachment")
async def create_issue_attachment(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    file_path: Annotated[
        str, Field(description="Path of a local file readable by the server")
    ],
    name: Annotated[
        str | None,
        Field(description="Attachment name, defaults to the file name"),
    ] = None,
) -> str:
    """Upload a local file as attachment of an issue."""
    forgejo = await get_forgejo_fetcher(ctx)
    attachment = forgejo.attachments.create_attachment(
        owner, repo, "issues", index, file_path, name=name
    )
    return attachment.to_markdown()


@issues_mcp.tool(
    name="edit_issue_attachment",
    tags=_TAGS_WRITE,
    annotations={"title": "Edit Issue Attachment", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("edit attachment")
async def edit_issue_attachment(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    attachment_id: AttachmentId,
    name: Annotated[str, Field(description="New attachment name", min_length=1)],
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    attachment = forgejo.attachments.edit_attachment(
        owner, repo, "issues", index, attachment_id, name
    )
    return attachment.to_markdown()


@issues_mcp.tool(
    name="delete_issue_attachment",
    tags=_TAGS_WRITE,
    annotations={
        "title": "Delete Issue Attachment",
        "readOnlyHint": False,
        "destructiveHint": True,
    },
)
@check_write_access
@handle_forgejo_errors("delete attachment")
async def delete_issue_attachment(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    attachment_id: AttachmentId,
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    forgejo.attachments.delete_attachment(owner, repo, "issues", index, attachment_id)
    return EMPTY_RESPONSE_MARKDOWN


# Dependencies

OtherOwner = Annotated[
    str | None,
    Field(description="Owner of the other issue's repository, defaults to owner"),
]
OtherRepo = Annotated[
    str | None,
    Field(description="Repository of the other issue, defaults to repo"),
]


@issues_mcp.tool(
    name="list_issue_dependencies",
    tags=_TAGS_READ,
    annotations={"title": "List Issue Dependencies", "readOnlyHint": True},
)
@handle_forgejo_errors("list dependencies")
async def list_issue_dependencies(
    ctx: Context, owner: Owner, repo: Repo, index: IssueIndex
) -> str:
    """List the issues that block the given issue."""
    forgejo = await get_forgejo_fetcher(ctx)
    issues = forgejo.dependencies.list_dependencies(owner, repo, index)
    return f"## Issues that block #{index}\n\n{render_issue_list(issues)}"


@issues_mcp.tool(
    name="add_issue_dependency",
    tags=_TAGS_WRITE,
    annotations={"title": "Add Issue Dependency", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("add dependency")
async def add_issue_dependency(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    dependency_index: Annotated[
        int, Field(description="Number of the issue that blocks `index`", ge=1)
    ],
    dependency_owner: OtherOwner = None,
    dependency_repo: OtherRepo = None,
) -> str:
    """Make an issue depend on another issue."""
    forgejo = await get_forgejo_fetcher(ctx)
    issue = forgejo.dependencies.add_dependency(
        owner, repo, index, dependency_index, dependency_owner, dependency_repo
    )
    return f"Dependency added to issue #{index}\n\n{issue.to_markdown()}"


@issues_mcp.tool(
    name="remove_issue_dependency",
    tags=_TAGS_WRITE,
    annotations={
        "title": "Remove Issue Dependency",
        "readOnlyHint": False,
        "destructiveHint": True,
    },
)
@check_write_access
@handle_forgejo_errors("remove dependency")
async def remove_issue_dependency(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    dependency_index: Annotated[
        int, Field(description="Number of the blocking issue to remove", ge=1)
    ],
    dependency_owner: OtherOwner = None,
    dependency_repo: OtherRepo = None,
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    issue = forgejo.dependencies.remove_dependency(
        owner, repo, index, dependency_index, dependency_owner, dependency_repo
    )
    return f"Dependency removed from issue #{index}\n\n{issue.to_markdown()}"


@issues_mcp.tool(
    name="list_issue_blocking",
    tags=_TAGS_READ,
    annotations={"title": "List Issues Blocked By Issue", "readOnlyHint": True},
)
@handle_forgejo_errors("list blocked issues")
async def list_issue_blocking(
    ctx: Context, owner: Owner, repo: Repo, index: IssueIndex
) -> str:
    """List the issues blocked by the given issue."""
    forgejo = await get_forgejo_fetcher(ctx)
    issues = forgejo.dependencies.list_blocking(owner, repo, index)
    return f"## Issues blocked by #{index}\n\n{render_issue_list(issues)}"


@issues_mcp.tool(
    name="add_issue_blocking",
    tags=_TAGS_WRITE,
    annotations={"title": "Add Blocked Issue", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("add blocking relation")
async def add_issue_blocking(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    blocked_index: Annotated[
        int, Field(description="Number of the issue blocked by `index`", ge=1)
    ],
    blocked_owner: OtherOwner = None,
    blocked_repo: OtherRepo = None,
) -> str:
    """Make an issue block another issue."""
    forgejo = await get_forgejo_fetcher(ctx)
    issue = forgejo.dependencies.add_blocking(
        owner, repo, index, blocked_index, blocked_owner, blocked_repo
    )
    return f"Blocking relation added to issue #{index}\n\n{issue.to_markdown()}"


@issues_mcp.tool(
    name="remove_issue_blocking",
    tags=_TAGS_WRITE,
    annotations={
        "title": "Remove Blocked Issue",
        "readOnlyHint": False,
        "destructiveHint": True,
    },
)
@check_write_access
@handle_forgejo_errors("remove blocking relation")
async def remove_issue_blocking(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    index: IssueIndex,
    blocked_index: Annotated[
        int, Field(description="Number of the blocked issue to release", ge=1)
    ],
    blocked_owner: OtherOwner = None,
    blocked_repo: OtherRepo = None,
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    issue = forgejo.dependencies.remove_blocking(
        owner, repo, index, blocked_index, blocked_owner, blocked_repo
    )
    return f"Blocking relation removed from issue #{index}\n\n{issue.to_markdown()}"
