"""Repository lookup operations for Forgejo."""

import logging
from typing import Any

from ..models import ForgejoRepository
from .client import ForgejoClient, api_path, repo_path

logger = logging.getLogger("forgejo-mcp.forgejo.repositories")


class RepositoriesOperations:
    """Repository search and lookup operations."""

    def __init__(self, client: ForgejoClient) -> None:
        self.client = client

    def search_repositories(
        self,
        q: str,
        topic: bool = False,
        include_desc: bool = False,
        sort: str | None = None,
        order: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[ForgejoRepository]:
        """Search repositories visible to the authenticated user.

        Args:
            q: Keyword
            topic: Match the keyword against topics only
            include_desc: Also search repository descriptions
            sort: "alpha", "created", "updated", "size" or "id"
            order: "asc" or "desc"
            page: Page number (1-based)
            limit: Page size

        Returns:
            Matching repositories
        """
        params: dict[str, Any] = {
            "q": q,
            "topic": "true" if topic else None,
            "includeDesc": "true" if include_desc else None,
            "sort": sort,
            "order": order,
            "page": page,
            "limit": limit,
        }
        data = self.client.get(api_path("repos", "search"), params=params) or {}
        return [
            ForgejoRepository.from_api_response(item)
            for item in data.get("data") or []
        ]

    def list_my_repositories(
        self, page: int | None = None, limit: int | None = None
    ) -> list[ForgejoRepository]:
        data = self.client.get(
            api_path("user", "repos"), params={"page": page, "limit": limit}
        )
        return [ForgejoRepository.from_api_response(item) for item in data or []]

    def list_org_repositories(
        self, org: str, page: int | None = None, limit: int | None = None
    ) -> list[ForgejoRepository]:
        data = self.client.get(
            api_path("orgs", org, "repos"), params={"page": page, "limit": limit}
        )
        return [ForgejoRepository.from_api_response(item) for item in data or []]

    def get_repository(self, owner: str, repo: str) -> ForgejoRepository:
        data = self.client.get(repo_path(owner, repo))
        return ForgejoRepository.from_api_response(data)
