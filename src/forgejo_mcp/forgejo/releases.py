"""Release operations for Forgejo."""

import logging
from typing import Any

from ..models import ForgejoRelease
from .client import ForgejoClient, repo_path

logger = logging.getLogger("forgejo-mcp.forgejo.releases")


class ReleasesOperations:
    """Release operations. Release assets live in :mod:`.attachments`."""

    def __init__(self, client: ForgejoClient) -> None:
        self.client = client

    def list_releases(
        self,
        owner: str,
        repo: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[ForgejoRelease]:
        data = self.client.get(
            repo_path(owner, repo, "releases"), params={"page": page, "limit": limit}
        )
        return [ForgejoRelease.from_api_response(item) for item in data or []]

    def create_release(
        self,
        owner: str,
        repo: str,
        tag_name: str,
        name: str,
        target_commitish: str | None = None,
        body: str | None = None,
        draft: bool = False,
        prerelease: bool = False,
    ) -> ForgejoRelease:
        """Create a release, creating the tag when it does not exist yet.

        Args:
            owner: Repository owner
            repo: Repository name
            tag_name: Tag of the release
            name: Release title
            target_commitish: Branch or commit the tag is created from
            body: Release notes
            draft: Create as draft
            prerelease: Mark as pre-release

        Returns:
            The created release
        """
        payload: dict[str, Any] = {
            "tag_name": tag_name,
            "name": name,
            "draft": draft,
            "prerelease": prerelease,
        }
        if target_commitish:
            payload["target_commitish"] = target_commitish
        if body:
            payload["body"] = body
        data = self.client.post(repo_path(owner, repo, "releases"), payload)
        return ForgejoRelease.from_api_response(data)

    def edit_release(
        self,
        owner: str,
        repo: str,
        release_id: int,
        tag_name: str | None = None,
        target_commitish: str | None = None,
        name: str | None = None,
        body: str | None = None,
        draft: bool | None = None,
        prerelease: bool | None = None,
    ) -> ForgejoRelease:
        """Edit a release. Fields left as None are not sent, so the draft and
        pre-release flags stay untouched unless given."""
        payload: dict[str, Any] = {
            key: value
            for key, value in {
                "tag_name": tag_name,
                "target_commitish": target_commitish,
                "name": name,
                "body": body,
                "draft": draft,
                "prerelease": prerelease,
            }.items()
            if value is not None
        }
        if not payload:
            raise ValueError("At least one field to change must be provided")
        data = self.client.patch(
            repo_path(owner, repo, "releases", release_id), payload
        )
        return ForgejoRelease.from_api_response(data)

    def delete_release(self, owner: str, repo: str, release_id: int) -> None:
        self.client.delete(repo_path(owner, repo, "releases", release_id))
