"""Issue and release attachment operations for Forgejo.

Both attachment families share one set of operations; they only differ in
the parent resource path (``issues/{index}`` or ``releases/{id}``).
"""

import logging
from pathlib import Path
from typing import Any

from ..models import ForgejoAttachment
from .client import ForgejoClient, repo_path

logger = logging.getLogger("forgejo-mcp.forgejo.attachments")


class AttachmentsOperations:
    """Attachment (asset) operations for issues and releases."""

    def __init__(self, client: ForgejoClient) -> None:
        """Initialize attachment operations.

        Args:
            client: Forgejo client
        """
        self.client = client

    @staticmethod
    def _parent_path(owner: str, repo: str, kind: str, parent_id: int) -> str:
        if kind not in ("issues", "releases"):
            raise ValueError(f"Unsupported attachment parent: {kind}")
        return repo_path(owner, repo, kind, parent_id, "assets")

    def list_attachments(
        self, owner: str, repo: str, kind: str, parent_id: int
    ) -> list[ForgejoAttachment]:
        """List attachments of an issue (``kind="issues"``) or a release
        (``kind="releases"``)."""
        data = self.client.get(self._parent_path(owner, repo, kind, parent_id))
        return [ForgejoAttachment.from_api_response(item) for item in data or []]

    def create_attachment(
        self,
        owner: str,
        repo: str,
        kind: str,
        parent_id: int,
        file_path: str,
        name: str | None = None,
    ) -> ForgejoAttachment:
        """Upload a local file as attachment.

        Args:
            owner: Repository owner
            repo: Repository name
            kind: "issues" or "releases"
            parent_id: Issue number or release ID
            file_path: Path of the local file to upload
            name: Display name, defaults to the file name

        Returns:
            The created attachment

        Raises:
            ValueError: If the file cannot be read
        """
        path = Path(file_path).expanduser()
        if not path.is_file():
            raise ValueError(f"File not found: {file_path}")

        filename = name or path.name
        endpoint = self._parent_path(owner, repo, kind, parent_id)
        params: dict[str, Any] | None = None
        if kind == "releases":
            params = {"name": filename}

        logger.debug(f"Uploading {path} as '{filename}' to {endpoint}")
        with path.open("rb") as file:
            data = self.client.send_upload_request(
                endpoint,
                filename,
                file,
                extra_fields={"name": filename},
                params=params,
            )
        return ForgejoAttachment.from_api_response(data)

    def edit_attachment(
        self,
        owner: str,
        repo: str,
        kind: str,
        parent_id: int,
        attachment_id: int,
        name: str,
    ) -> ForgejoAttachment:
        data = self.client.patch(
            f"{self._parent_path(owner, repo, kind, parent_id)}/{attachment_id}",
            {"name": name},
        )
        return ForgejoAttachment.from_api_response(data)

    def delete_attachment(
        self, owner: str, repo: str, kind: str, parent_id: int, attachment_id: int
    ) -> None:
        self.client.delete(
            f"{self._parent_path(owner, repo, kind, parent_id)}/{attachment_id}"
        )
