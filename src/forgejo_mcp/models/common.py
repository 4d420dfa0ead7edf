"""Users, labels and milestones."""

from ..utils.date import format_date
from .base import ApiDatetime, ApiModel, render_bulleted, render_numbered


class ForgejoUser(ApiModel):
    id: int = 0
    login: str = ""
    full_name: str = ""
    email: str = ""
    html_url: str = ""

    def to_markdown(self) -> str:
        return self.login


class ForgejoLabel(ApiModel):
    """A repository or organization label."""

    id: int = 0
    name: str = ""
    color: str = ""
    description: str = ""
    exclusive: bool = False
    url: str = ""

    def to_markdown(self) -> str:
        """Render as ``**name** `#color` - description``."""
        markdown = f"**{self.name}**"
        if self.color:
            markdown += f" `#{self.color.lstrip('#')}`"
        if self.description:
            markdown += f" - {self.description}"
        return markdown


class ForgejoMilestone(ApiModel):
    """A repository milestone with its issue counters."""

    id: int = 0
    title: str = ""
    description: str = ""
    state: str = ""
    open_issues: int = 0
    closed_issues: int = 0
    due_on: ApiDatetime = None
    created_at: ApiDatetime = None
    closed_at: ApiDatetime = None

    @property
    def progress(self) -> tuple[int, int]:
        """Closed and total issue counts."""
        return self.closed_issues, self.closed_issues + self.open_issues

    def to_markdown(self) -> str:
        markdown = f"**{self.title}**"
        if self.state:
            markdown += f" ({self.state})"
        if self.due_on:
            markdown += f" - Due: {format_date(self.due_on)}"
        closed, total = self.progress
        if total > 0:
            markdown += f" - Progress: {closed}/{total}"
        if self.description:
            markdown += f"\n{self.description}"
        return markdown


def render_labels(labels: list[ForgejoLabel]) -> str:
    return render_bulleted(labels, "*No labels found*")


def render_milestones(milestones: list[ForgejoMilestone]) -> str:
    return render_numbered(milestones, "*No milestones found*")
