"""Wiki operations for Forgejo.

Page names are sent as a single percent-encoded path segment and page
content travels base64-encoded in both directions.
"""

import logging

from ..models import WikiPage, WikiPageMeta, encode_wiki_content
from .client import ForgejoClient, repo_path

logger = logging.getLogger("forgejo-mcp.forgejo.wiki")


class WikiOperations:
    """Wiki page operations."""

    def __init__(self, client: ForgejoClient) -> None:
        self.client = client

    def list_pages(
        self,
        owner: str,
        repo: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[WikiPageMeta]:
        data = self.client.get(
            repo_path(owner, repo, "wiki", "pages"),
            params={"page": page, "limit": limit},
        )
        return [WikiPageMeta.from_api_response(item) for item in data or []]

    def get_page(self, owner: str, repo: str, page_name: str) -> WikiPage:
        data = self.client.get(repo_path(owner, repo, "wiki", "page", page_name))
        return WikiPage.from_api_response(data)

    def create_page(
        self,
        owner: str,
        repo: str,
        title: str,
        content: str,
        message: str | None = None,
    ) -> WikiPage:
        """Create a wiki page.

        Args:
            owner: Repository owner
            repo: Repository name
            title: Page title
            content: Markdown content (plain text, encoded here)
            message: Commit message

        Returns:
            The created page
        """
        payload = {"title": title, "content_base64": encode_wiki_content(content)}
        if message:
            payload["message"] = message
        data = self.client.post(repo_path(owner, repo, "wiki", "new"), payload)
        return WikiPage.from_api_response(data)

    def edit_page(
        self,
        owner: str,
        repo: str,
        page_name: str,
        content: str,
        title: str | None = None,
        message: str | None = None,
    ) -> WikiPage:
        """Replace the content of a wiki page.

        The page keeps ``page_name`` as its title unless ``title`` renames it.
        """
        payload = {
            "title": title or page_name,
            "content_base64": encode_wiki_content(content),
        }
        if message:
            payload["message"] = message
        data = self.client.patch(
            repo_path(owner, repo, "wiki", "page", page_name), payload
        )
        return WikiPage.from_api_response(data)

    def delete_page(self, owner: str, repo: str, page_name: str) -> None:
        logger.debug(f"Deleting wiki page '{page_name}' of {owner}/{repo}")
        self.client.delete(repo_path(owner, repo, "wiki", "page", page_name))
