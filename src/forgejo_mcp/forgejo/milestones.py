"""Milestone operations for Forgejo."""

import logging
from datetime import datetime
from typing import Any

from ..models import ForgejoMilestone
from .client import ForgejoClient, repo_path

logger = logging.getLogger("forgejo-mcp.forgejo.milestones")


class MilestonesOperations:
    """Milestone operations."""

    def __init__(self, client: ForgejoClient) -> None:
        self.client = client

    def list_milestones(
        self,
        owner: str,
        repo: str,
        state: str | None = None,
        name: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[ForgejoMilestone]:
        """List milestones.

        Args:
            owner: Repository owner
            repo: Repository name
            state: "open", "closed" or "all"
            name: Filter by milestone name
            page: Page number (1-based)
            limit: Page size

        Returns:
            Milestones of the requested page
        """
        params = {"state": state, "name": name, "page": page, "limit": limit}
        data = self.client.get(repo_path(owner, repo, "milestones"), params=params)
        return [ForgejoMilestone.from_api_response(item) for item in data or []]

    def create_milestone(
        self,
        owner: str,
        repo: str,
        title: str,
        description: str | None = None,
        due_on: datetime | None = None,
    ) -> ForgejoMilestone:
        payload: dict[str, Any] = {"title": title}
        if description:
            payload["description"] = description
        if due_on:
            payload["due_on"] = due_on.isoformat()
        data = self.client.post(repo_path(owner, repo, "milestones"), payload)
        return ForgejoMilestone.from_api_response(data)

    def edit_milestone(
        self,
        owner: str,
        repo: str,
        milestone_id: int,
        title: str | None = None,
        description: str | None = None,
        due_on: datetime | None = None,
        state: str | None = None,
    ) -> ForgejoMilestone:
        """Edit a milestone. Only the given fields are changed.

        Raises:
            ValueError: If no field to change is given
        """
        payload: dict[str, Any] = {
            key: value
            for key, value in {
                "title": title,
                "description": description,
                "due_on": due_on.isoformat() if due_on else None,
                "state": state,
            }.items()
            if value is not None
        }
        if not payload:
            raise ValueError("At least one field to change must be provided")
        data = self.client.patch(
            repo_path(owner, repo, "milestones", milestone_id), payload
        )
        return ForgejoMilestone.from_api_response(data)

    def delete_milestone(self, owner: str, repo: str, milestone_id: int) -> None:
        self.client.delete(repo_path(owner, repo, "milestones", milestone_id))
