"""Pull request operations for Forgejo."""

import logging
from datetime import datetime
from typing import Any

from ..models import ForgejoPullRequest
from .client import ForgejoClient, repo_path

logger = logging.getLogger("forgejo-mcp.forgejo.pull_requests")


class PullRequestsOperations:
    """Pull request operations."""

    def __init__(self, client: ForgejoClient) -> None:
        self.client = client

    def list_pull_requests(
        self,
        owner: str,
        repo: str,
        state: str | None = None,
        sort: str | None = None,
        milestone: int | None = None,
        labels: list[int] | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[ForgejoPullRequest]:
        """List pull requests.

        Args:
            owner: Repository owner
            repo: Repository name
            state: "open", "closed" or "all"
            sort: "oldest", "recentupdate", "leastupdate", "mostcomment",
                "leastcomment" or "priority"
            milestone: Milestone ID
            labels: Label IDs, sent as repeated query parameters
            page: Page number (1-based)
            limit: Page size

        Returns:
            Pull requests of the requested page
        """
        params: dict[str, Any] = {
            "state": state,
            "sort": sort,
            "milestone": milestone,
            "labels": labels or None,
            "page": page,
            "limit": limit,
        }
        data = self.client.get(repo_path(owner, repo, "pulls"), params=params)
        return [ForgejoPullRequest.from_api_response(item) for item in data or []]

    def get_pull_request(
        self, owner: str, repo: str, index: int
    ) -> ForgejoPullRequest:
        data = self.client.get(repo_path(owner, repo, "pulls", index))
        return ForgejoPullRequest.from_api_response(data)

    def create_pull_request(
        self,
        owner: str,
        repo: str,
        head: str,
        base: str,
        title: str,
        body: str | None = None,
        assignees: list[str] | None = None,
        milestone: int | None = None,
        labels: list[int] | None = None,
        due_date: datetime | None = None,
    ) -> ForgejoPullRequest:
        """Open a pull request merging ``head`` into ``base``.

        Returns:
            The created pull request
        """
        payload: dict[str, Any] = {"head": head, "base": base, "title": title}
        if body:
            payload["body"] = body
        if assignees:
            payload["assignees"] = assignees
        if milestone:
            payload["milestone"] = milestone
        if labels:
            payload["labels"] = labels
        if due_date:
            payload["due_date"] = due_date.isoformat()
        logger.debug(f"Creating pull request {head} -> {base} in {owner}/{repo}")
        data = self.client.post(repo_path(owner, repo, "pulls"), payload)
        return ForgejoPullRequest.from_api_response(data)
