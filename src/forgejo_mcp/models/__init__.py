"""
Pydantic models for Forgejo API responses.

Every model renders itself as Markdown with ``to_markdown``; the
``render_*`` helpers render lists with the matching empty placeholder.
"""

from .action import ActionTask, ActionTaskList
from .attachment import ForgejoAttachment, render_attachments
from .base import EMPTY_RESPONSE_MARKDOWN, ApiModel
from .common import (
    ForgejoLabel,
    ForgejoMilestone,
    ForgejoUser,
    render_labels,
    render_milestones,
)
from .issue import ForgejoComment, ForgejoIssue, render_issue_list
from .pull_request import ForgejoPRBranchInfo, ForgejoPullRequest, render_pull_requests
from .release import ForgejoRelease, render_releases
from .repository import ForgejoRepository, render_repositories
from .wiki import (
    WikiCommit,
    WikiCommitUser,
    WikiPage,
    WikiPageMeta,
    encode_wiki_content,
    render_wiki_pages,
)

__all__ = [
    "EMPTY_RESPONSE_MARKDOWN",
    "ActionTask",
    "ActionTaskList",
    "ApiModel",
    "ForgejoAttachment",
    "ForgejoComment",
    "ForgejoIssue",
    "ForgejoLabel",
    "ForgejoMilestone",
    "ForgejoPRBranchInfo",
    "ForgejoPullRequest",
    "ForgejoRelease",
    "ForgejoRepository",
    "ForgejoUser",
    "WikiCommit",
    "WikiCommitUser",
    "WikiPage",
    "WikiPageMeta",
    "encode_wiki_content",
    "render_attachments",
    "render_issue_list",
    "render_labels",
    "render_milestones",
    "render_pull_requests",
    "render_releases",
    "render_repositories",
    "render_wiki_pages",
]
