"""Issue comment operations for Forgejo."""

import logging
from datetime import datetime
from typing import Any

from ..models import ForgejoComment
from .client import ForgejoClient, repo_path

logger = logging.getLogger("forgejo-mcp.forgejo.comments")


class CommentsOperations:
    """Issue comment operations."""

    def __init__(self, client: ForgejoClient) -> None:
        self.client = client

    def list_comments(
        self,
        owner: str,
        repo: str,
        index: int,
        since: datetime | None = None,
        before: datetime | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[ForgejoComment]:
        """List comments of an issue.

        Args:
            owner: Repository owner
            repo: Repository name
            index: Issue number
            since: Only comments updated at or after this time
            before: Only comments updated before this time
            page: Page number (1-based)
            limit: Page size

        Returns:
            Comments in creation order
        """
        params: dict[str, Any] = {
            "since": since.isoformat() if since else None,
            "before": before.isoformat() if before else None,
            "page": page,
            "limit": limit,
        }
        data = self.client.get(
            repo_path(owner, repo, "issues", index, "comments"), params=params
        )
        return [ForgejoComment.from_api_response(item) for item in data or []]

    def create_comment(
        self, owner: str, repo: str, index: int, body: str
    ) -> ForgejoComment:
        data = self.client.post(
            repo_path(owner, repo, "issues", index, "comments"), {"body": body}
        )
        return ForgejoComment.from_api_response(data)

    def edit_comment(
        self, owner: str, repo: str, comment_id: int, body: str
    ) -> ForgejoComment:
        data = self.client.patch(
            repo_path(owner, repo, "issues", "comments", comment_id), {"body": body}
        )
        return ForgejoComment.from_api_response(data)

    def delete_comment(self, owner: str, repo: str, comment_id: int) -> None:
        logger.debug(f"Deleting comment {comment_id} of {owner}/{repo}")
        self.client.delete(repo_path(owner, repo, "issues", "comments", comment_id))
