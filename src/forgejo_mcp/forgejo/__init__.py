"""Forgejo integration for Forgejo MCP."""

import logging

import httpx

from .actions import ActionsOperations
from .attachments import AttachmentsOperations
from .client import ForgejoClient
from .comments import CommentsOperations
from .config import ForgejoConfig
from .dependencies import DependenciesOperations
from .issues import IssuesOperations
from .labels import LabelsOperations
from .milestones import MilestonesOperations
from .pull_requests import PullRequestsOperations
from .releases import ReleasesOperations
from .repositories import RepositoriesOperations
from .wiki import WikiOperations

logger = logging.getLogger("forgejo-mcp.forgejo")


class ForgejoFetcher:
    """Main interface for Forgejo operations.

    All resource operations share one :class:`ForgejoClient`.
    """

    def __init__(
        self, config: ForgejoConfig, session: httpx.Client | None = None
    ) -> None:
        """Initialize Forgejo fetcher.

        Args:
            config: Forgejo configuration
            session: Optional pre-configured HTTP client, mainly for tests
        """
        self.config = config
        self.client = ForgejoClient(config, session=session)
        self.issues = IssuesOperations(self.client)
        self.comments = CommentsOperations(self.client)
        self.attachments = AttachmentsOperations(self.client)
        self.dependencies = DependenciesOperations(self.client)
        self.labels = LabelsOperations(self.client)
        self.milestones = MilestonesOperations(self.client)
        self.releases = ReleasesOperations(self.client)
        self.pull_requests = PullRequestsOperations(self.client)
        self.repositories = RepositoriesOperations(self.client)
        self.wiki = WikiOperations(self.client)
        self.actions = ActionsOperations(self.client)

    def get_server_version(self) -> str:
        """Get the Forgejo server version, probing the server unless configured."""
        return self.client.get_server_version()

    def close(self) -> None:
        self.client.close()


__all__ = ["ForgejoClient", "ForgejoConfig", "ForgejoFetcher"]
