"""Release FastMCP server instance and tool definitions.

Release attachments (assets) are managed here as well.
"""

import logging
from typing import Annotated

from fastmcp import Context, FastMCP
from pydantic import Field

from forgejo_mcp.models import (
    EMPTY_RESPONSE_MARKDOWN,
    render_attachments,
    render_releases,
)
from forgejo_mcp.servers.dependencies import get_forgejo_fetcher
from forgejo_mcp.servers.params import DEFAULT_LIMIT, Limit, Owner, Page, Repo
from forgejo_mcp.utils.decorators import check_write_access, handle_forgejo_errors

logger = logging.getLogger("forgejo-mcp.server.releases")

releases_mcp = FastMCP(
    name="Forgejo Releases Service",
    instructions="Provides tools for Forgejo releases and release attachments.",
)

_TAGS_READ = {"forgejo", "read", "toolset:releases"}
_TAGS_WRITE = {"forgejo", "write", "toolset:releases"}

ReleaseId = Annotated[int, Field(description="Release ID", ge=1)]
AttachmentId = Annotated[int, Field(description="Attachment ID", ge=1)]


@releases_mcp.tool(
    name="list_releases",
    tags=_TAGS_READ,
    annotations={"title": "List Releases", "readOnlyHint": True},
)
@handle_forgejo_errors("list releases")
async def list_releases(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    page: Page = 1,
    limit: Limit = DEFAULT_LIMIT,
) -> str:
    """List the releases of a repository, newest first."""
    forgejo = await get_forgejo_fetcher(ctx)
    releases = forgejo.releases.list_releases(owner, repo, page=page, limit=limit)
    if not releases:
        return "No releases found in this repository."
    return f"Found {len(releases)} releases\n\n{render_releases(releases)}"


@releases_mcp.tool(
    name="create_release",
    tags=_TAGS_WRITE,
    annotations={"title": "Create Release", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("create release")
async def create_release(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    tag_name: Annotated[
        str, Field(description="Tag of the release, e.g. 'v1.2.0'", min_length=1)
    ],
    name: Annotated[str, Field(description="Release title", min_length=1)],
    target_commitish: Annotated[
        str | None,
        Field(
            description=(
                "Branch or commit SHA the tag is created from when it does not "
                "exist yet. Defaults to the default branch."
            )
        ),
    ] = None,
    body: Annotated[str | None, Field(description="Release notes (Markdown)")] = None,
    draft: Annotated[bool, Field(description="Create as draft")] = False,
    prerelease: Annotated[bool, Field(description="Mark as pre-release")] = False,
) -> str:
    """Create a release.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        tag_name: Release tag.
        name: Release title.
        target_commitish: Branch or commit for a new tag.
        body: Release notes.
        draft: Create as draft.
        prerelease: Mark as pre-release.

    Returns:
        Markdown of the created release.
    """
    forgejo = await get_forgejo_fetcher(ctx)
    release = forgejo.releases.create_release(
        owner,
        repo,
        tag_name=tag_name,
        name=name,
        target_commitish=target_commitish,
        body=body,
        draft=draft,
        prerelease=prerelease,
    )
    return release.to_markdown()


@releases_mcp.tool(
    name="edit_release",
    tags=_TAGS_WRITE,
    annotations={"title": "Edit Release", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("edit release")
async def edit_release(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    id: ReleaseId,
    tag_name: Annotated[str | None, Field(description="New tag name")] = None,
    target_commitish: Annotated[
        str | None, Field(description="New target branch or commit")
    ] = None,
    name: Annotated[str | None, Field(description="New release title")] = None,
    body: Annotated[str | None, Field(description="New release notes")] = None,
    draft: Annotated[
        bool | None, Field(description="Draft flag; omit to keep the current value")
    ] = None,
    prerelease: Annotated[
        bool | None,
        Field(description="Pre-release flag; omit to keep the current value"),
    ] = None,
) -> str:
    """Edit a release. Only the given fields are changed."""
    forgejo = await get_forgejo_fetcher(ctx)
    release = forgejo.releases.edit_release(
        owner,
        repo,
        id,
        tag_name=tag_name,
        target_commitish=target_commitish,
        name=name,
        body=body,
        draft=draft,
        prerelease=prerelease,
    )
    return release.to_markdown()


@releases_mcp.tool(
    name="delete_release",
    tags=_TAGS_WRITE,
    annotations={
        "title": "Delete Release",
        "readOnlyHint": False,
        "destructiveHint": True,
    },
)
@check_write_access
@handle_forgejo_errors("delete release")
async def delete_release(ctx: Context, owner: Owner, repo: Repo, id: ReleaseId) -> str:
    """Delete a release. The tag itself is kept."""
    forgejo = await get_forgejo_fetcher(ctx)
    forgejo.releases.delete_release(owner, repo, id)
    return EMPTY_RESPONSE_MARKDOWN


@releases_mcp.tool(
    name="list_release_attachments",
    tags=_TAGS_READ,
    annotations={"title": "List Release Attachments", "readOnlyHint": True},
)
@handle_forgejo_errors("list release attachments")
async def list_release_attachments(
    ctx: Context, owner: Owner, repo: Repo, release_id: ReleaseId
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    attachments = forgejo.attachments.list_attachments(
        owner, repo, "releases", release_id
    )
    if not attachments:
        return "No attachments found for this release."
    return f"Found {len(attachments)} attachments\n\n{render_attachments(attachments)}"


@releases_mcp.tool(
    name="create_release_attachment",
    tags=_TAGS_WRITE,
    annotations={"title": "Create Release Attachment", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("create release attachment")
async def create_release_attachment(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    release_id: ReleaseId,
    file_path: Annotated[
        str, Field(description="Path of a local file readable by the server")
    ],
    name: Annotated[
        str | None,
        Field(description="Attachment name, defaults to the file name"),
    ] = None,
) -> str:
    """Upload a local file as release asset."""
    forgejo = await get_forgejo_fetcher(ctx)
    attachment = forgejo.attachments.create_attachment(
        owner, repo, "releases", release_id, file_path, name=name
    )
    return attachment.to_markdown()


@releases_mcp.tool(
    name="edit_release_attachment",
    tags=_TAGS_WRITE,
    annotations={"title": "Edit Release Attachment", "readOnlyHint": False},
)
@check_write_access
@handle_forgejo_errors("edit release attachment")
async def edit_release_attachment(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    release_id: ReleaseId,
    attachment_id: AttachmentId,
    name: Annotated[str, Field(description="New attachment name", min_length=1)],
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    attachment = forgejo.attachments.edit_attachment(
        owner, repo, "releases", release_id, attachment_id, name
    )
    return attachment.to_markdown()


@releases_mcp.tool(
    name="delete_release_attachment",
    tags=_TAGS_WRITE,
    annotations={
        "title": "Delete Release Attachment",
        "readOnlyHint": False,
        "destructiveHint": True,
    },
)
@check_write_access
@handle_forgejo_errors("delete release attachment")
async def delete_release_attachment(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    release_id: ReleaseId,
    attachment_id: AttachmentId,
) -> str:
    forgejo = await get_forgejo_fetcher(ctx)
    forgejo.attachments.delete_attachment(
        owner, repo, "releases", release_id, attachment_id
    )
    return EMPTY_RESPONSE_MARKDOWN
