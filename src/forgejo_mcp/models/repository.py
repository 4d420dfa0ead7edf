"""Repository model."""

from .base import ApiDatetime, ApiModel, render_numbered
from .common import ForgejoUser


class ForgejoRepository(ApiModel):
    id: int = 0
    name: str = ""
    full_name: str = ""
    description: str = ""
    owner: ForgejoUser | None = None
    private: bool = False
    fork: bool = False
    template: bool = False
    archived: bool = False
    stars_count: int = 0
    forks_count: int = 0
    open_issues_count: int = 0
    open_pr_counter: int = 0
    default_branch: str = ""
    html_url: str = ""
    clone_url: str = ""
    ssh_url: str = ""
    updated_at: ApiDatetime = None

    def to_markdown(self) -> str:
        """Render name with visibility badges, description, counters and link.

        Example::

            **octo/hello** `PRIVATE`
            A sample repository
            Stars: 5 | Forks: 1 | Issues: 3 | PRs: 0
            [View Repository](https://forgejo.example.com/octo/hello)
        """
        markdown = f"**{self.full_name}**"
        if self.private:
            markdown += " `PRIVATE`"
        if self.fork:
            markdown += " `FORK`"
        if self.template:
            markdown += " `TEMPLATE`"
        markdown += "\n"
        if self.description:
            markdown += f"{self.description}\n"
        markdown += (
            f"Stars: {self.stars_count} | Forks: {self.forks_count} | "
            f"Issues: {self.open_issues_count} | PRs: {self.open_pr_counter}\n"
        )
        if self.html_url:
            markdown += f"[View Repository]({self.html_url})"
        return markdown


def render_repositories(repositories: list[ForgejoRepository]) -> str:
    return render_numbered(repositories, "*No repositories found*")
