"""Issue dependency and blocking relation operations for Forgejo."""

import logging

from ..models import ForgejoIssue
from .client import ForgejoClient, repo_path

logger = logging.getLogger("forgejo-mcp.forgejo.dependencies")

DEPENDENCIES = "dependencies"
BLOCKS = "blocks"


class DependenciesOperations:
    """Issue dependency operations.

    ``dependencies`` of an issue are the issues it depends on (they block
    it); ``blocks`` are the issues it blocks.
    """

    def __init__(self, client: ForgejoClient) -> None:
        self.client = client

    def _list(
        self, owner: str, repo: str, index: int, relation: str
    ) -> list[ForgejoIssue]:
        data = self.client.get(repo_path(owner, repo, "issues", index, relation))
        return [ForgejoIssue.from_api_response(item) for item in data or []]

    def _change(
        self,
        method: str,
        owner: str,
        repo: str,
        index: int,
        relation: str,
        other_index: int,
        other_owner: str | None,
        other_repo: str | None,
    ) -> ForgejoIssue:
        meta = {
            "index": other_index,
            "owner": other_owner or owner,
            "repo": other_repo or repo,
        }
        logger.debug(f"{method} {relation} of {owner}/{repo}#{index}: {meta}")
        data = self.client.send_json_request(
            method, repo_path(owner, repo, "issues", index, relation), meta
        )
        return ForgejoIssue.from_api_response(data)

    def list_dependencies(
        self, owner: str, repo: str, index: int
    ) -> list[ForgejoIssue]:
        """List the issues that block the given issue."""
        return self._list(owner, repo, index, DEPENDENCIES)

    def add_dependency(
        self,
        owner: str,
        repo: str,
        index: int,
        dependency_index: int,
        dependency_owner: str | None = None,
        dependency_repo: str | None = None,
    ) -> ForgejoIssue:
        """Make issue ``index`` depend on issue ``dependency_index``.

        The dependency defaults to the same repository.

        Returns:
            The dependency issue as returned by the server
        """
        return self._change(
            "POST",
            owner,
            repo,
            index,
            DEPENDENCIES,
            dependency_index,
            dependency_owner,
            dependency_repo,
        )

    def remove_dependency(
        self,
        owner: str,
        repo: str,
        index: int,
        dependency_index: int,
        dependency_owner: str | None = None,
        dependency_repo: str | None = None,
    ) -> ForgejoIssue:
        return self._change(
            "DELETE",
            owner,
            repo,
            index,
            DEPENDENCIES,
            dependency_index,
            dependency_owner,
            dependency_repo,
        )

    def list_blocking(
        self, owner: str, repo: str, index: int
    ) -> list[ForgejoIssue]:
        """List the issues blocked by the given issue."""
        return self._list(owner, repo, index, BLOCKS)

    def add_blocking(
        self,
        owner: str,
        repo: str,
        index: int,
        blocked_index: int,
        blocked_owner: str | None = None,
        blocked_repo: str | None = None,
    ) -> ForgejoIssue:
        """Make issue ``index`` block issue ``blocked_index``."""
        return self._change(
            "POST",
            owner,
            repo,
            index,
            BLOCKS,
            blocked_index,
            blocked_owner,
            blocked_repo,
        )

    def remove_blocking(
        self,
        owner: str,
        repo: str,
        index: int,
        blocked_index: int,
        blocked_owner: str | None = None,
        blocked_repo: str | None = None,
    ) -> ForgejoIssue:
        return self._change(
            "DELETE",
            owner,
            repo,
            index,
            BLOCKS,
            blocked_index,
            blocked_owner,
            blocked_repo,
        )
