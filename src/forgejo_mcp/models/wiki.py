"""Wiki page models.

Page content travels base64-encoded in ``content_base64``; ``content`` holds
the decoded text.
"""

import base64
import binascii
from datetime import datetime

from pydantic import Field

from ..utils.date import DATETIME_FORMAT, format_date
from .base import ApiDatetime, ApiModel


class WikiCommitUser(ApiModel):
    name: str = ""
    email: str = ""
    date: ApiDatetime = None


class WikiCommit(ApiModel):
    """Last commit of a wiki page.

    The API spells the committer key ``commiter``.
    """

    sha: str = ""
    message: str = ""
    author: WikiCommitUser | None = None
    committer: WikiCommitUser | None = Field(default=None, alias="commiter")

    @property
    def date(self) -> datetime | None:
        for who in (self.committer, self.author):
            if who and who.date:
                return who.date
        return None


class WikiPageMeta(ApiModel):
    """Wiki page entry of the page listing."""

    title: str = ""
    html_url: str = ""
    sub_url: str = ""
    last_commit: WikiCommit | None = None

    @property
    def last_modified(self) -> datetime | None:
        return self.last_commit.date if self.last_commit else None

    def to_markdown(self) -> str:
        markdown = f"**{self.title}**"
        if self.last_modified:
            markdown += f" ({format_date(self.last_modified)})"
        return markdown


class WikiPage(WikiPageMeta):
    """A wiki page with its content."""

    content_base64: str = ""
    commit_count: int = 0
    sidebar: str = ""
    footer: str = ""

    @property
    def content(self) -> str:
        """Decoded page content; undecodable content is returned as sent."""
        if not self.content_base64:
            return ""
        try:
            return base64.b64decode(self.content_base64, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return self.content_base64

    def to_markdown(self) -> str:
        markdown = f"# {self.title}\n"
        if self.last_modified:
            modified = format_date(self.last_modified, DATETIME_FORMAT)
            markdown += f"*Last modified: {modified}*\n\n"
        markdown += self.content
        return markdown


def render_wiki_pages(pages: list[WikiPageMeta]) -> str:
    if not pages:
        return "*No wiki pages found*"
    entries = "".join(f"- {WikiPageMeta.to_markdown(page)}\n" for page in pages)
    return "## Wiki Pages\n" + entries


def encode_wiki_content(content: str) -> str:
    return base64.b64encode(content.encode("utf-8")).decode("ascii")
