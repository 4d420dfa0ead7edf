"""Tests for the Forgejo API models and their Markdown rendering."""

import base64

from forgejo_mcp.models import (
    EMPTY_RESPONSE_MARKDOWN,
    ActionTaskList,
    ForgejoAttachment,
    ForgejoComment,
    ForgejoIssue,
    ForgejoLabel,
    ForgejoMilestone,
    ForgejoPullRequest,
    ForgejoRelease,
    ForgejoRepository,
    WikiPage,
    WikiPageMeta,
    render_attachments,
    render_issue_list,
    render_labels,
    render_milestones,
    render_releases,
    render_repositories,
    render_wiki_pages,
)


class TestForgejoIssue:
    def test_from_api_response_ignores_nulls_and_unknown_keys(self):
        issue = ForgejoIssue.from_api_response(
            {
                "number": 3,
                "title": "Crash",
                "body": None,
                "milestone": None,
                "pull_request": {"merged": False},
            }
        )
        assert issue.body == ""
        assert issue.milestone is None

    def test_zero_time_is_treated_as_unset(self):
        issue = ForgejoIssue.from_api_response(
            {"number": 3, "due_date": "0001-01-01T00:00:00Z"}
        )
        assert issue.due_date is None

    def test_from_api_response_none(self):
        issue = ForgejoIssue.from_api_response(None)
        assert issue.number == 0
        assert issue.labels == []

    def test_to_markdown_full(self):
        issue = ForgejoIssue.from_api_response(
            {
                "number": 123,
                "title": "Fix login bug",
                "state": "open",
                "body": "The login page crashes when...",
                "user": {"login": "johndoe"},
                "assignees": [{"login": "alice"}, {"login": "bob"}],
                "labels": [{"name": "bug"}, {"name": "priority-high"}],
                "milestone": {"title": "v1.0.0"},
                "due_date": "2024-12-31T00:00:00Z",
            }
        )

        assert issue.to_markdown() == (
            "**#123 Fix login bug** (open)\n"
            "Author: johndoe\n"
            "Assignees: [alice bob]\n"
            "Labels: [bug priority-high]\n"
            "Milestone: v1.0.0\n"
            "Due: 2024-12-31\n"
            "\n"
            "The login page crashes when..."
        )

    def test_to_markdown_minimal(self):
        issue = ForgejoIssue.from_api_response(
            {"number": 1, "title": "Bare", "state": "closed"}
        )
        assert issue.to_markdown() == "**#1 Bare** (closed)\n"

    def test_list_line(self):
        issue = ForgejoIssue.from_api_response(
            {
                "number": 123,
                "title": "Fix login bug",
                "state": "open",
                "assignees": [{"login": "alice"}],
                "labels": [{"name": "bug"}],
                "updated_at": "2024-01-15T10:00:00Z",
                "comments": 5,
            }
        )
        assert issue.to_list_line() == (
            "#123 Fix login bug (open) | [alice] | [bug] | 2024-01-15 | 5"
        )

    def test_render_issue_list_empty(self):
        assert render_issue_list([]) == "*No issues found*"


def test_comment_markdown():
    comment = ForgejoComment.from_api_response(
        {
            "id": 1,
            "body": "Looks good",
            "user": {"login": "bob"},
            "created_at": "2024-01-15T10:30:00Z",
        }
    )
    assert comment.to_markdown() == "**bob** (2024-01-15 10:30)\nLooks good"


class TestLabelsAndMilestones:
    def test_label_markdown_normalizes_color(self):
        label = ForgejoLabel.from_api_response(
            {"name": "bug", "color": "#e11d21", "description": "Something broke"}
        )
        assert label.to_markdown() == "**bug** `#e11d21` - Something broke"

    def test_render_labels(self):
        labels = [
            ForgejoLabel.from_api_response({"name": "bug", "color": "e11d21"}),
            ForgejoLabel.from_api_response({"name": "docs"}),
        ]
        assert render_labels(labels) == "- **bug** `#e11d21`\n- **docs**\n"
        assert render_labels([]) == "*No labels found*"

    def test_milestone_markdown(self):
        milestone = ForgejoMilestone.from_api_response(
            {
                "title": "v1.0",
                "state": "open",
                "due_on": "2025-03-01T00:00:00Z",
                "open_issues": 2,
                "closed_issues": 8,
                "description": "First release",
            }
        )
        assert milestone.to_markdown() == (
            "**v1.0** (open) - Due: 2025-03-01 - Progress: 8/10\nFirst release"
        )

    def test_milestone_without_issues_has_no_progress(self):
        milestone = ForgejoMilestone.from_api_response({"title": "Later"})
        assert "Progress" not in milestone.to_markdown()

    def test_render_milestones_numbered(self):
        milestones = [
            ForgejoMilestone.from_api_response({"title": "v1"}),
            ForgejoMilestone.from_api_response({"title": "v2"}),
        ]
        assert render_milestones(milestones) == "1. **v1**\n2. **v2**\n"


class TestReleasesAndAttachments:
    def test_release_badges(self):
        release = ForgejoRelease.from_api_response(
            {
                "tag_name": "v2.0.0-rc1",
                "name": "RC 1",
                "draft": True,
                "prerelease": True,
                "created_at": "2024-05-01T12:00:00Z",
                "body": "Notes",
            }
        )
        assert release.to_markdown() == (
            "**v2.0.0-rc1** - RC 1 `DRAFT` `PRERELEASE` (2024-05-01)\nNotes"
        )

    def test_render_releases_empty(self):
        assert render_releases([]) == "*No releases found*"

    def test_attachment_markdown(self):
        attachment = ForgejoAttachment.from_api_response(
            {
                "name": "app.zip",
                "size": 1024,
                "browser_download_url": "https://forgejo.example.com/attachments/x",
            }
        )
        assert attachment.to_markdown() == (
            "**app.zip** (1024 bytes) "
            "[Download](https://forgejo.example.com/attachments/x)"
        )

    def test_empty_attachment_has_no_size(self):
        attachment = ForgejoAttachment.from_api_response({"name": "empty.txt"})
        assert render_attachments([attachment]) == "- **empty.txt**\n"


def test_pull_request_markdown():
    pull_request = ForgejoPullRequest.from_api_response(
        {
            "number": 12,
            "title": "Add feature",
            "state": "open",
            "user": {"login": "alice"},
            "head": {"label": "feature-x"},
            "base": {"label": "main"},
            "body": "Implements X",
        }
    )
    assert pull_request.to_markdown() == (
        "**#12 Add feature** (open)\n"
        "Author: alice\n"
        "Branch: feature-x → main\n"
        "\n"
        "Implements X"
    )


def test_repository_markdown():
    repository = ForgejoRepository.from_api_response(
        {
            "full_name": "octo/hello",
            "private": True,
            "description": "A sample repository",
            "stars_count": 5,
            "forks_count": 1,
            "open_issues_count": 3,
            "html_url": "https://forgejo.example.com/octo/hello",
        }
    )
    assert repository.to_markdown() == (
        "**octo/hello** `PRIVATE`\n"
        "A sample repository\n"
        "Stars: 5 | Forks: 1 | Issues: 3 | PRs: 0\n"
        "[View Repository](https://forgejo.example.com/octo/hello)"
    )
    assert render_repositories([]) == "*No repositories found*"


class TestWikiPage:
    def test_content_is_decoded(self):
        encoded = base64.b64encode("# Héllo".encode()).decode()
        page = WikiPage.from_api_response({"title": "Home", "content_base64": encoded})
        assert page.content == "# Héllo"
        assert page.to_markdown() == "# Home\n# Héllo"

    def test_invalid_base64_is_returned_as_sent(self):
        page = WikiPage.from_api_response({"content_base64": "not base64!"})
        assert page.content == "not base64!"

    def test_last_modified_prefers_committer(self):
        page = WikiPage.from_api_response(
            {
                "title": "Home",
                "last_commit": {
                    "author": {"date": "2024-01-01T00:00:00Z"},
                    "commiter": {"date": "2024-02-01T09:15:00Z"},
                },
            }
        )
        assert page.to_markdown() == "# Home\n*Last modified: 2024-02-01 09:15*\n\n"

    def test_render_wiki_pages(self):
        assert render_wiki_pages([]) == "*No wiki pages found*"
        page = WikiPage.from_api_response({"title": "Home"})
        assert render_wiki_pages([page]) == "## Wiki Pages\n- **Home**\n"

    def test_render_wiki_pages_lists_titles_and_dates(self):
        pages = [
            WikiPageMeta.from_api_response(
                {
                    "title": "Home",
                    "last_commit": {"commiter": {"date": "2024-02-01T09:15:00Z"}},
                }
            ),
            WikiPage.from_api_response(
                {"title": "Setup", "content_base64": "IyBTZXR1cA=="}
            ),
        ]
        assert render_wiki_pages(pages) == (
            "## Wiki Pages\n- **Home** (2024-02-01)\n- **Setup**\n"
        )


class TestActionTasks:
    def test_task_markdown_with_duration(self):
        tasks = ActionTaskList.from_api_response(
            {
                "total_count": 1,
                "workflow_runs": [
                    {
                        "display_title": "Fix typo",
                        "status": "success",
                        "run_number": 12,
                        "created_at": "2024-03-01T10:00:00Z",
                        "run_started_at": "2024-03-01T10:00:05Z",
                        "updated_at": "2024-03-01T10:01:10Z",
                    }
                ],
            }
        )
        assert tasks.to_markdown() == (
            "1. **Fix typo** `success` - Run #12 | Created: 2024-03-01 10:00"
            " | Duration: 1m5s\n"
        )

    def test_empty_task_list(self):
        tasks = ActionTaskList.from_api_response({"total_count": 0})
        assert tasks.to_markdown() == "*No action tasks found*"


def test_empty_response_markdown():
    assert EMPTY_RESPONSE_MARKDOWN == "*Operation completed successfully*"
