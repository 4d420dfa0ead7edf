"""Issue and issue comment models."""

from pydantic import Field

from ..utils.date import DATETIME_FORMAT, format_date
from .base import ApiDatetime, ApiModel
from .common import ForgejoLabel, ForgejoMilestone, ForgejoUser


class ForgejoIssue(ApiModel):
    """A repository issue as returned by the issue endpoints."""

    id: int = 0
    number: int = 0
    title: str = ""
    body: str = ""
    state: str = ""
    user: ForgejoUser | None = None
    assignees: list[ForgejoUser] = Field(default_factory=list)
    labels: list[ForgejoLabel] = Field(default_factory=list)
    milestone: ForgejoMilestone | None = None
    comments: int = 0
    due_date: ApiDatetime = None
    created_at: ApiDatetime = None
    updated_at: ApiDatetime = None
    closed_at: ApiDatetime = None
    html_url: str = ""

    @property
    def assignee_names(self) -> list[str]:
        return [assignee.login for assignee in self.assignees]

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]

    def to_markdown(self) -> str:
        """Render the full issue: header, metadata lines, then the body.

        Example::

            **#123 Fix login bug** (open)
            Author: johndoe
            Assignees: [alice bob]
            Labels: [bug priority-high]
            Milestone: v1.0.0
            Due: 2024-12-31

            The login page crashes when...
        """
        markdown = f"**#{self.number} {self.title}** ({self.state})\n"
        if self.user:
            markdown += f"Author: {self.user.login}\n"
        if self.assignees:
            markdown += f"Assignees: [{' '.join(self.assignee_names)}]\n"
        if self.labels:
            markdown += f"Labels: [{' '.join(self.label_names)}]\n"
        if self.milestone:
            markdown += f"Milestone: {self.milestone.title}\n"
        if self.due_date:
            markdown += f"Due: {format_date(self.due_date)}\n"
        if self.body:
            markdown += f"\n{self.body}"
        return markdown

    def to_list_line(self) -> str:
        """One-line summary used in issue lists.

        Example: ``#123 Fix login bug (open) | [alice] | [bug] | 2024-01-15 | 5``
        """
        line = f"#{self.number} {self.title} ({self.state})"
        if self.assignees:
            line += f" | [{' '.join(self.assignee_names)}]"
        if self.labels:
            line += f" | [{' '.join(self.label_names)}]"
        if self.updated_at:
            line += f" | {format_date(self.updated_at)}"
        line += f" | {self.comments}"
        return line


def render_issue_list(issues: list[ForgejoIssue]) -> str:
    if not issues:
        return "*No issues found*"
    return "".join(f"{issue.to_list_line()}\n" for issue in issues)


class ForgejoComment(ApiModel):
    id: int = 0
    body: str = ""
    user: ForgejoUser | None = None
    created_at: ApiDatetime = None
    updated_at: ApiDatetime = None
    html_url: str = ""

    def to_markdown(self) -> str:
        markdown = ""
        if self.user:
            markdown += f"**{self.user.login}**"
        if self.created_at:
            markdown += f" ({format_date(self.created_at, DATETIME_FORMAT)})"
        if self.body:
            markdown += f"\n{self.body}"
        return markdown
