"""Issue operations for Forgejo."""

import logging
from datetime import datetime
from typing import Any

from ..models import ForgejoIssue, ForgejoLabel
from .client import ForgejoClient, repo_path

logger = logging.getLogger("forgejo-mcp.forgejo.issues")


def _format_due_date(due_date: datetime | str | None) -> str | None:
    if due_date is None or isinstance(due_date, str):
        return due_date
    return due_date.isoformat()


class IssuesOperations:
    """Issue and issue label operations."""

    def __init__(self, client: ForgejoClient) -> None:
        """Initialize issue operations.

        Args:
            client: Forgejo client
        """
        self.client = client

    def list_issues(
        self,
        owner: str,
        repo: str,
        state: str | None = None,
        labels: list[str] | None = None,
        milestones: list[str] | None = None,
        assigned_by: str | None = None,
        q: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[ForgejoIssue]:
        """List issues of a repository, excluding pull requests.

        Args:
            owner: Repository owner
            repo: Repository name
            state: "open", "closed" or "all"
            labels: Label names the issues must carry
            milestones: Milestone names or IDs
            assigned_by: Only issues assigned to this user
            q: Search keyword
            page: Page number (1-based)
            limit: Page size

        Returns:
            Issues of the requested page
        """
        params: dict[str, Any] = {
            "type": "issues",
            "state": state,
            "labels": ",".join(labels) if labels else None,
            "milestones": ",".join(milestones) if milestones else None,
            "assigned_by": assigned_by,
            "q": q,
            "page": page,
            "limit": limit,
        }
        logger.debug(f"Listing issues of {owner}/{repo} with {params}")
        data = self.client.get(repo_path(owner, repo, "issues"), params=params)
        return [ForgejoIssue.from_api_response(item) for item in data or []]

    def get_issue(self, owner: str, repo: str, index: int) -> ForgejoIssue:
        data = self.client.get(repo_path(owner, repo, "issues", index))
        return ForgejoIssue.from_api_response(data)

    def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str | None = None,
        assignees: list[str] | None = None,
        milestone: int | None = None,
        labels: list[int] | None = None,
        due_date: datetime | str | None = None,
    ) -> ForgejoIssue:
        """Create an issue.

        Returns:
            The created issue
        """
        payload: dict[str, Any] = {"title": title}
        if body:
            payload["body"] = body
        if assignees:
            payload["assignees"] = assignees
        if milestone:
            payload["milestone"] = milestone
        if labels:
            payload["labels"] = labels
        if due_date:
            payload["due_date"] = _format_due_date(due_date)

        data = self.client.post(repo_path(owner, repo, "issues"), payload)
        return ForgejoIssue.from_api_response(data)

    def edit_issue(
        self,
        owner: str,
        repo: str,
        index: int,
        title: str | None = None,
        body: str | None = None,
        state: str | None = None,
        assignees: list[str] | None = None,
        milestone: int | None = None,
        due_date: datetime | str | None = None,
    ) -> ForgejoIssue:
        """Edit an issue. Only the given fields are changed.

        Raises:
            ValueError: If no field to change is given
        """
        payload: dict[str, Any] = {
            key: value
            for key, value in {
                "title": title,
                "body": body,
                "state": state,
                "assignees": assignees,
                "milestone": milestone,
                "due_date": _format_due_date(due_date),
            }.items()
            if value is not None
        }
        if not payload:
            raise ValueError("At least one field to change must be provided")

        data = self.client.patch(repo_path(owner, repo, "issues", index), payload)
        return ForgejoIssue.from_api_response(data)

    def add_labels(
        self, owner: str, repo: str, index: int, label_ids: list[int]
    ) -> list[ForgejoLabel]:
        """Add labels to an issue.

        Returns:
            All labels of the issue after the change
        """
        data = self.client.post(
            repo_path(owner, repo, "issues", index, "labels"), {"labels": label_ids}
        )
        return [ForgejoLabel.from_api_response(item) for item in data or []]

    def remove_label(self, owner: str, repo: str, index: int, label_id: int) -> None:
        self.client.delete(repo_path(owner, repo, "issues", index, "labels", label_id))

    def replace_labels(
        self, owner: str, repo: str, index: int, label_ids: list[int]
    ) -> list[ForgejoLabel]:
        """Replace all labels of an issue. An empty list clears them.

        Returns:
            All labels of the issue after the change
        """
        data = self.client.put(
            repo_path(owner, repo, "issues", index, "labels"), {"labels": label_ids}
        )
        return [ForgejoLabel.from_api_response(item) for item in data or []]
