"""Repository label operations for Forgejo."""

import logging
from typing import Any

from ..models import ForgejoLabel
from .client import ForgejoClient, repo_path

logger = logging.getLogger("forgejo-mcp.forgejo.labels")


class LabelsOperations:
    """Repository label operations."""

    def __init__(self, client: ForgejoClient) -> None:
        self.client = client

    def list_labels(
        self,
        owner: str,
        repo: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[ForgejoLabel]:
        data = self.client.get(
            repo_path(owner, repo, "labels"), params={"page": page, "limit": limit}
        )
        return [ForgejoLabel.from_api_response(item) for item in data or []]

    def create_label(
        self,
        owner: str,
        repo: str,
        name: str,
        color: str,
        description: str | None = None,
        exclusive: bool | None = None,
    ) -> ForgejoLabel:
        """Create a label.

        Args:
            owner: Repository owner
            repo: Repository name
            name: Label name
            color: Hex color, with or without the leading "#"
            description: Label description
            exclusive: Whether the label is exclusive within its scope

        Returns:
            The created label
        """
        payload: dict[str, Any] = {"name": name, "color": color}
        if description:
            payload["description"] = description
        if exclusive is not None:
            payload["exclusive"] = exclusive
        data = self.client.post(repo_path(owner, repo, "labels"), payload)
        return ForgejoLabel.from_api_response(data)

    def edit_label(
        self,
        owner: str,
        repo: str,
        label_id: int,
        name: str | None = None,
        color: str | None = None,
        description: str | None = None,
    ) -> ForgejoLabel:
        payload = {
            key: value
            for key, value in {
                "name": name,
                "color": color,
                "description": description,
            }.items()
            if value is not None
        }
        if not payload:
            raise ValueError("At least one of name, color or description is required")
        data = self.client.patch(repo_path(owner, repo, "labels", label_id), payload)
        return ForgejoLabel.from_api_response(data)

    def delete_label(self, owner: str, repo: str, label_id: int) -> None:
        self.client.delete(repo_path(owner, repo, "labels", label_id))
