"""Forgejo Actions operations."""

import logging

from ..models import ActionTaskList
from .client import ForgejoClient, repo_path

logger = logging.getLogger("forgejo-mcp.forgejo.actions")


class ActionsOperations:
    """Forgejo Actions task operations."""

    def __init__(self, client: ForgejoClient) -> None:
        self.client = client

    def list_tasks(
        self,
        owner: str,
        repo: str,
        status: str | None = None,
        workflow: str | None = None,
        branch: str | None = None,
        event: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> ActionTaskList:
        """List Actions tasks of a repository.

        The endpoint only paginates; status, workflow, branch and event are
        matched against the returned page. ``total_count`` stays the server's
        count of all tasks.

        Args:
            owner: Repository owner
            repo: Repository name
            status: Task status, e.g. "success", "failure", "running"
            workflow: Workflow file name, e.g. "ci.yml"
            branch: Head branch
            event: Triggering event, e.g. "push", "pull_request"
            page: Page number (1-based)
            limit: Page size

        Returns:
            Task list of the requested page
        """
        data = self.client.get(
            repo_path(owner, repo, "actions", "tasks"),
            params={"page": page, "limit": limit},
        )
        tasks = ActionTaskList.from_api_response(data)

        filters = {
            "status": status,
            "workflow_id": workflow,
            "head_branch": branch,
            "event": event,
        }
        active = {key: value for key, value in filters.items() if value}
        if active:
            logger.debug(f"Filtering {len(tasks.workflow_runs)} tasks by {active}")
            tasks.workflow_runs = [
                task
                for task in tasks.workflow_runs
                if all(getattr(task, key) == value for key, value in active.items())
            ]
        return tasks
