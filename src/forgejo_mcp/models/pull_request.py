"""Pull request models."""

from pydantic import Field

from .base import ApiDatetime, ApiModel, render_numbered
from .common import ForgejoLabel, ForgejoMilestone, ForgejoUser


class ForgejoPRBranchInfo(ApiModel):
    """Head or base side of a pull request. ``label`` is the branch name."""

    label: str = ""
    ref: str = ""
    sha: str = ""
    repo_id: int = 0


class ForgejoPullRequest(ApiModel):
    id: int = 0
    number: int = 0
    title: str = ""
    body: str = ""
    state: str = ""
    user: ForgejoUser | None = None
    assignees: list[ForgejoUser] = Field(default_factory=list)
    labels: list[ForgejoLabel] = Field(default_factory=list)
    milestone: ForgejoMilestone | None = None
    head: ForgejoPRBranchInfo | None = None
    base: ForgejoPRBranchInfo | None = None
    merged: bool = False
    mergeable: bool = False
    comments: int = 0
    html_url: str = ""
    diff_url: str = ""
    created_at: ApiDatetime = None
    updated_at: ApiDatetime = None
    merged_at: ApiDatetime = None

    def to_markdown(self) -> str:
        """Render header, author and ``head → base`` branch line, then the body."""
        markdown = f"**#{self.number} {self.title}** ({self.state})\n"
        if self.user:
            markdown += f"Author: {self.user.login}\n"
        if self.head and self.base:
            markdown += f"Branch: {self.head.label} → {self.base.label}\n"
        if self.body:
            markdown += f"\n{self.body}"
        return markdown


def render_pull_requests(pull_requests: list[ForgejoPullRequest]) -> str:
    return render_numbered(pull_requests, "*No pull requests found*")
