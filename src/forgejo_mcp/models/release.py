"""Release model."""

from pydantic import Field

from ..utils.date import format_date
from .attachment import ForgejoAttachment
from .base import ApiDatetime, ApiModel, render_numbered
from .common import ForgejoUser


class ForgejoRelease(ApiModel):
    """A repository release.

    The API names the release title ``name`` and the release notes ``body``.
    """

    id: int = 0
    tag_name: str = ""
    target_commitish: str = ""
    name: str = ""
    body: str = ""
    draft: bool = False
    prerelease: bool = False
    author: ForgejoUser | None = None
    html_url: str = ""
    tarball_url: str = ""
    zipball_url: str = ""
    created_at: ApiDatetime = None
    published_at: ApiDatetime = None
    assets: list[ForgejoAttachment] = Field(default_factory=list)

    def to_markdown(self) -> str:
        markdown = f"**{self.tag_name}**"
        if self.name:
            markdown += f" - {self.name}"
        if self.draft:
            markdown += " `DRAFT`"
        if self.prerelease:
            markdown += " `PRERELEASE`"
        if self.created_at:
            markdown += f" ({format_date(self.created_at)})"
        if self.body:
            markdown += f"\n{self.body}"
        return markdown


def render_releases(releases: list[ForgejoRelease]) -> str:
    return render_numbered(releases, "*No releases found*")
