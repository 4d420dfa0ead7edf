"""Forgejo Actions task models."""

from pydantic import Field

from ..utils.date import DATETIME_FORMAT, format_date, format_duration
from .base import ApiDatetime, ApiModel, render_numbered


class ActionTask(ApiModel):
    """One Actions task (workflow run) of a repository."""

    id: int = 0
    name: str = ""
    display_title: str = ""
    status: str = ""
    event: str = ""
    workflow_id: str = ""
    head_branch: str = ""
    head_sha: str = ""
    run_number: int = 0
    url: str = ""
    created_at: ApiDatetime = None
    updated_at: ApiDatetime = None
    run_started_at: ApiDatetime = None

    @property
    def duration(self) -> str:
        return format_duration(self.run_started_at, self.updated_at)

    def to_markdown(self) -> str:
        """Render status, run number, creation time and duration.

        Example: ``**Fix typo** `success` - Run #12 | Duration: 1m5s``
        """
        markdown = f"**{self.display_title}** `{self.status}` - Run #{self.run_number}"
        if self.created_at:
            markdown += f" | Created: {format_date(self.created_at, DATETIME_FORMAT)}"
        if self.duration:
            markdown += f" | Duration: {self.duration}"
        return markdown


class ActionTaskList(ApiModel):
    total_count: int = 0
    workflow_runs: list[ActionTask] = Field(default_factory=list)

    def to_markdown(self) -> str:
        return render_numbered(self.workflow_runs, "*No action tasks found*")
